"""Domain value objects and the error taxonomy."""
