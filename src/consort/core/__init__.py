"""Core value objects and the error taxonomy."""
