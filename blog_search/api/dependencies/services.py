# blog_search/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from ...services.search.suggestion_service import SearchSuggestionService
from ...services.search_history_service import SearchHistoryRecorder, SearchHistoryService
from ...services.search_service import BlogSearchService
from .database import get_db, get_session_factory


def get_search_service(db: Session = Depends(get_db)) -> BlogSearchService:
    return BlogSearchService(db)


def get_search_history_service(db: Session = Depends(get_db)) -> SearchHistoryService:
    return SearchHistoryService(db)


def get_search_history_recorder(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> SearchHistoryRecorder:
    """Recorder writing through its own sessions, never the request session."""
    return SearchHistoryRecorder(session_factory)


def get_suggestion_service(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> SearchSuggestionService:
    return SearchSuggestionService(session_factory)
