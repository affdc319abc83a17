"""
Persistence for the booking platform: SQLModel tables over async SQLAlchemy.

``entities`` holds one module per table and ``repositories`` one data access
class per table. The application engine lives in ``session``; routes receive
a per-request session through ``get_session`` and the server creates missing
tables at startup with ``init_db``.
"""

from .session import get_session, init_db
from .utils import normalize_database_url

__all__ = ["get_session", "init_db", "normalize_database_url"]
