# blog_search/services/search_history_service.py
"""
Search History services.

``SearchHistoryRecorder`` writes one record per search for authenticated
users. It runs detached from the request and never raises: a failed write
is logged and dropped.

``SearchHistoryService`` is the user-facing side: list and clear the
caller's own history.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from ..core.background import BackgroundTaskTracker, background_tasks
from ..core.config import settings
from ..database import session_scope
from ..models.search_history import SearchHistory
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .search.pagination import PageRequest

logger = logging.getLogger(__name__)


class SearchHistoryRecorder(BaseService):
    """Persists search history outside the request session."""

    def __init__(
        self,
        session_factory: sessionmaker,
        max_per_user: Optional[int] = None,
        tracker: Optional[BackgroundTaskTracker] = None,
    ):
        super().__init__(db=None)
        self.session_factory = session_factory
        self.max_per_user = (
            settings.search_history_max_per_user if max_per_user is None else max_per_user
        )
        self.tracker = tracker or background_tasks

    @BaseService.measure_operation("record_search")
    def record(
        self,
        user_id: str,
        query_text: Optional[str],
        filters: dict[str, Any],
        result_count: int,
    ) -> Optional[SearchHistory]:
        """
        Store one search for ``user_id``.

        Returns the new record, or None when the query text is blank or the
        write failed.
        """
        text = (query_text or "").strip()
        if not text:
            prometheus_metrics.inc_history_write("skipped")
            return None

        try:
            with session_scope(self.session_factory) as db:
                repository = RepositoryFactory.create_search_history_repository(db)
                entry = repository.create(
                    user_id=user_id,
                    query_text=text,
                    filters=filters,
                    result_count=result_count,
                )
                if self.max_per_user > 0:
                    deleted = repository.delete_beyond_limit(user_id, self.max_per_user)
                    if deleted > 0:
                        self.logger.info(
                            f"Deleted {deleted} old searches for user {user_id} to maintain limit"
                        )
        except Exception as e:
            self.logger.error(f"Failed to record search for user {user_id}: {str(e)}", exc_info=True)
            prometheus_metrics.inc_history_write("failed")
            return None

        prometheus_metrics.inc_history_write("recorded")
        return entry

    def spawn(
        self,
        user_id: str,
        query_text: Optional[str],
        filters: dict[str, Any],
        result_count: int,
    ) -> asyncio.Task:
        """
        Schedule ``record`` on a worker thread without waiting for it.

        Must be called from a running event loop. The task is owned by the
        background tracker.
        """
        return self.tracker.spawn(
            asyncio.to_thread(self.record, user_id, query_text, filters, result_count),
            name=f"record-search:{user_id}",
        )


@dataclass
class SearchHistoryListing:
    items: List[SearchHistory]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class SearchHistoryService(BaseService):
    """List and clear a user's own search history."""

    def __init__(self, db: Session, max_page_size: Optional[int] = None):
        super().__init__(db)
        self.repository = RepositoryFactory.create_search_history_repository(db)
        self.max_page_size = max_page_size or settings.search_max_page_size

    @BaseService.measure_operation("list_history")
    def list_history(self, user_id: str, page: int = 1, page_size: int = 10) -> SearchHistoryListing:
        """Newest first, scoped to ``user_id``."""
        page_request = PageRequest.clamp(page, page_size, self.max_page_size)
        items = self.repository.list_for_user(
            user_id, skip=page_request.skip, limit=page_request.limit
        )
        total = self.repository.count_for_user(user_id)
        return SearchHistoryListing(
            items=items,
            total_count=total,
            page=page_request.page,
            page_size=page_request.page_size,
            total_pages=page_request.total_pages(total),
        )

    @BaseService.measure_operation("clear_history")
    def clear_history(self, user_id: str) -> int:
        """
        Hard delete every search belonging to ``user_id``.

        Returns:
            Number of deleted records
        """
        with self.transaction():
            deleted = self.repository.delete_user_searches(user_id)
        logger.info(f"Cleared {deleted} searches for user {user_id}")
        return deleted
