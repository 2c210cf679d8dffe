# blog_search/services/search_history_cleanup_service.py
"""
Search History Cleanup Service.

Age-based purge of search history, run periodically by Celery. The per-user
cap is enforced at write time by the recorder; this service handles the
retention window.
"""

from datetime import datetime, timedelta, timezone
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class SearchHistoryCleanupService(BaseService):
    """Permanently deletes search history older than the retention window."""

    def __init__(self, db: Session, retention_days: Optional[int] = None):
        """Initialize the cleanup service."""
        super().__init__(db)
        self.repository = RepositoryFactory.create_search_history_repository(db)
        self.retention_days = (
            settings.search_history_retention_days if retention_days is None else retention_days
        )

    def _cutoff(self, now: Optional[datetime] = None) -> datetime:
        return (now or datetime.now(timezone.utc)) - timedelta(days=self.retention_days)

    @BaseService.measure_operation("cleanup_expired")
    def cleanup_expired(self, now: Optional[datetime] = None) -> int:
        """
        Delete searches older than ``retention_days``.

        Returns:
            Number of records permanently deleted (0 when retention is disabled)
        """
        if not self.retention_days:
            logger.info("Search history retention is disabled (0 days), skipping cleanup")
            return 0

        cutoff = self._cutoff(now)
        try:
            with self.transaction():
                deleted_count = self.repository.delete_older_than(cutoff)
        except Exception as e:
            logger.error(f"Error cleaning up expired searches: {str(e)}")
            raise

        logger.info(
            f"Permanently deleted {deleted_count} searches older than {self.retention_days} days"
        )
        return deleted_count

    @BaseService.measure_operation("get_cleanup_statistics")
    def get_cleanup_statistics(self, now: Optional[datetime] = None) -> dict:
        """
        Get statistics about records eligible for cleanup.

        Returns:
            Dictionary with cleanup statistics
        """
        stats = {
            "retention_days": self.retention_days,
            "total_searches": self.repository.count_all_searches(),
            "expired_eligible": 0,
        }
        if self.retention_days:
            stats["expired_eligible"] = self.repository.count_older_than(self._cutoff(now))
        return stats
