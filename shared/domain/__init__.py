"""Domain layer building blocks."""
