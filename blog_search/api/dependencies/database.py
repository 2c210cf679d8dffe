# blog_search/api/dependencies/database.py
"""
Database-related dependencies.
"""

from typing import Generator

from sqlalchemy.orm import Session, sessionmaker

from ...database import get_db as original_get_db, get_session_factory as original_get_session_factory


def get_db() -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Yields:
        Database session that will be closed after use
    """
    yield from original_get_db()


def get_session_factory() -> sessionmaker:
    """Session factory for work that outlives or runs beside the request session."""
    return original_get_session_factory()
