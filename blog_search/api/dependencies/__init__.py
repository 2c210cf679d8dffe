# blog_search/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from ...auth import get_current_actor_id, get_current_actor_id_optional
from .database import get_db, get_session_factory
from .services import (
    get_search_history_recorder,
    get_search_history_service,
    get_search_service,
    get_suggestion_service,
)

__all__ = [
    # Auth
    "get_current_actor_id",
    "get_current_actor_id_optional",
    # Database
    "get_db",
    "get_session_factory",
    # Services
    "get_search_history_recorder",
    "get_search_history_service",
    "get_search_service",
    "get_suggestion_service",
]
