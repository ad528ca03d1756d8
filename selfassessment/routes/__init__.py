"""API route modules."""
from selfassessment.routes import courses, journal, pincode, result

__all__ = ["courses", "journal", "pincode", "result"]
