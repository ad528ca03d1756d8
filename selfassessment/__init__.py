"""SelfAssessment backend: course configuration, journals and results."""
