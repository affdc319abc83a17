"""
Exception handlers for the Coworkspace API.

Domain errors, HTTP errors and request validation errors are rendered into
the JSON error envelope; anything else reaches the global handler.
"""

from .app_handlers import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
