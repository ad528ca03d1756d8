"""Service layer: store accessors and the result workflows."""
