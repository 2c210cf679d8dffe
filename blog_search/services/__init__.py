# blog_search/services/__init__.py
"""
Service layer for the blog search service.

Services hold the business rules and own transaction boundaries; routes
stay thin and repositories only touch the database.
"""

from .base import BaseService
from .search_history_cleanup_service import SearchHistoryCleanupService
from .search_history_service import SearchHistoryListing, SearchHistoryRecorder, SearchHistoryService
from .search_service import BlogSearchService, SearchResultPage

__all__ = [
    "BaseService",
    "BlogSearchService",
    "SearchHistoryCleanupService",
    "SearchHistoryListing",
    "SearchHistoryRecorder",
    "SearchHistoryService",
    "SearchResultPage",
]
