"""Infrastructure shared across features."""
