"""Email validation and auth helpers for authentication flows."""

__version__ = "0.1.0"
