# blog_search/repositories/search_history_repository.py
"""
Search History Repository for data access operations.

Every query is scoped to a single user id except the retention helpers,
which operate across all users.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import desc, func, select

from ..models.search_history import SearchHistory
from .base_repository import BaseRepository

# Rows stamped in the same clock tick fall back to id order. That order is
# stable but need not match insertion order within the tick.
NEWEST_FIRST = (desc(SearchHistory.created_at), desc(SearchHistory.id))


class SearchHistoryRepository(BaseRepository[SearchHistory]):
    """Repository for search history data access."""

    def __init__(self, db):
        """Initialize with SearchHistory model."""
        super().__init__(db, SearchHistory)

    def create(
        self,
        user_id: str,
        query_text: str,
        filters: Optional[Dict[str, Any]] = None,
        result_count: int = 0,
        created_at: Optional[datetime] = None,
        **kwargs,
    ) -> SearchHistory:
        """
        Create a new search history entry.
        """
        values: Dict[str, Any] = {
            "user_id": user_id,
            "query_text": query_text,
            "filters": filters or {},
            "result_count": result_count,
        }
        if created_at is not None:
            values["created_at"] = created_at
        return super().create(**values, **kwargs)

    def list_for_user(self, user_id: str, skip: int = 0, limit: int = 10) -> List[SearchHistory]:
        """
        Get a page of a user's searches, newest first.

        Same ordering as the per-user cap, so the rows the cap keeps are
        exactly the first page of a listing.
        """
        query = (
            self.db.query(SearchHistory)
            .filter(SearchHistory.user_id == user_id)
            .order_by(*NEWEST_FIRST)
            .offset(skip)
            .limit(limit)
        )
        return self._execute_query(query)

    def count_for_user(self, user_id: str) -> int:
        """Count searches for a user."""
        query = self.db.query(func.count(SearchHistory.id)).filter(SearchHistory.user_id == user_id)
        return int(self._execute_scalar(query) or 0)

    def delete_user_searches(self, user_id: str) -> int:
        """
        Delete all searches for a user (hard delete).

        Returns:
            Number of deleted records
        """
        return (
            self.db.query(SearchHistory)
            .filter(SearchHistory.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def delete_beyond_limit(self, user_id: str, keep_count: int) -> int:
        """
        Delete a user's searches beyond the ``keep_count`` most recent.

        Returns:
            Number of deleted records
        """
        keep_ids = (
            select(SearchHistory.id)
            .where(SearchHistory.user_id == user_id)
            .order_by(*NEWEST_FIRST)
            .limit(keep_count)
        )
        return (
            self.db.query(SearchHistory)
            .filter(SearchHistory.user_id == user_id, ~SearchHistory.id.in_(keep_ids))
            .delete(synchronize_session=False)
        )

    # Retention methods

    def count_all_searches(self) -> int:
        """Count all search history records."""
        return int(self._execute_scalar(self.db.query(func.count(SearchHistory.id))) or 0)

    def count_older_than(self, cutoff: datetime) -> int:
        """Count records created before ``cutoff``."""
        query = self.db.query(func.count(SearchHistory.id)).filter(SearchHistory.created_at < cutoff)
        return int(self._execute_scalar(query) or 0)

    def delete_older_than(self, cutoff: datetime) -> int:
        """Hard delete records created before ``cutoff``."""
        return (
            self.db.query(SearchHistory)
            .filter(SearchHistory.created_at < cutoff)
            .delete(synchronize_session=False)
        )
