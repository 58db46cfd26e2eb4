"""Task management REST API with JWT authentication."""

__version__ = "1.0.0"
