"""Sample application package."""
