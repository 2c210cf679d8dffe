# blog_search/tasks/search_history_cleanup.py
"""
Celery tasks for search history cleanup.

Provides the periodic retention purge and a read-only dry run.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Callable, Dict, TypeVar, cast

from celery import shared_task
from sqlalchemy.orm import Session

from ..database import SessionLocal
from ..services.search_history_cleanup_service import SearchHistoryCleanupService

logger = logging.getLogger(__name__)


TaskCallable = TypeVar("TaskCallable", bound=Callable[..., Any])


def typed_shared_task(
    *task_args: Any, **task_kwargs: Any
) -> Callable[[TaskCallable], TaskCallable]:
    return cast(Callable[[TaskCallable], TaskCallable], shared_task(*task_args, **task_kwargs))


@typed_shared_task(
    name="cleanup_search_history",
    bind=True,
    autoretry_for=(Exception,),
    retry_kwargs={"max_retries": 3, "countdown": 60},
)
def cleanup_search_history(self: Any) -> Dict[str, Any]:
    """
    Periodic task deleting search history older than the retention window.

    Scheduled daily by ``get_beat_schedule``; a no-op while
    ``search_history_retention_days`` is 0.
    """
    logger.info(f"Starting search history cleanup task at {datetime.now(timezone.utc)}")

    db: Session = SessionLocal()
    try:
        cleanup_service = SearchHistoryCleanupService(db)

        stats_before = cleanup_service.get_cleanup_statistics()
        deleted = cleanup_service.cleanup_expired()
        stats_after = cleanup_service.get_cleanup_statistics()

        logger.info(f"Search history cleanup completed. Removed {deleted} expired records")

        return {
            "status": "success",
            "expired_removed": deleted,
            "stats_before": stats_before,
            "stats_after": stats_after,
            "completed_at": datetime.now(timezone.utc).isoformat(),
        }

    except Exception as e:
        logger.error(f"Error in search history cleanup task: {str(e)}")
        raise
    finally:
        db.close()


@typed_shared_task(
    name="search_history_cleanup_dry_run",
    bind=True,
)
def search_history_cleanup_dry_run(self: Any) -> Dict[str, Any]:
    """
    Dry run to check what would be cleaned up without actually deleting.
    """
    logger.info("Running search history cleanup dry run")

    db: Session = SessionLocal()
    try:
        stats = SearchHistoryCleanupService(db).get_cleanup_statistics()
        logger.info(f"Cleanup dry run statistics: {stats}")
        return {
            "status": "dry_run",
            "statistics": stats,
            "would_delete": stats["expired_eligible"],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    finally:
        db.close()
