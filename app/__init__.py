"""Auckland school finder application package."""

__all__ = []
