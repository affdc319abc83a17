"""
Middleware modules for the Coworkspace API.
"""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
