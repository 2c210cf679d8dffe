# blog_search/tasks/celery_app.py
"""
Celery application configuration for the blog search service.

This module sets up the Celery app with Redis as the broker and backend,
configures task serialization and registers the periodic maintenance schedule.
"""

import logging
import os
from typing import Any, Dict, Type, cast

from celery import Celery, Task
from celery.schedules import crontab
from celery.signals import setup_logging

from blog_search.core.config import settings

logger = logging.getLogger(__name__)


def get_beat_schedule() -> Dict[str, Dict[str, Any]]:
    """Periodic tasks. Retention cleanup runs daily at 03:15 UTC."""
    return {
        "cleanup-search-history": {
            "task": "cleanup_search_history",
            "schedule": crontab(hour=3, minute=15),
            "options": {"queue": "maintenance"},
        },
    }


def create_celery_app() -> Celery:
    """
    Create and configure the Celery application.

    Returns:
        Celery: Configured Celery application instance
    """
    # Priority: CELERY_BROKER_URL -> REDIS_URL -> settings.redis_url
    broker_url = os.getenv("CELERY_BROKER_URL") or os.getenv("REDIS_URL") or settings.redis_url
    result_backend = os.getenv("CELERY_RESULT_BACKEND") or broker_url

    celery_app = Celery("blog_search", broker=broker_url, backend=result_backend)

    celery_app.conf.update(
        {
            "task_serializer": "json",
            "accept_content": ["json"],
            "result_serializer": "json",
            "timezone": "UTC",
            "enable_utc": True,
            "worker_prefetch_multiplier": 4,
            "worker_max_tasks_per_child": 1000,
            "task_soft_time_limit": 300,  # 5 minutes soft limit
            "task_time_limit": 600,  # 10 minutes hard limit
            "task_acks_late": True,
            "task_reject_on_worker_lost": True,
            "task_default_retry_delay": 60,
            "worker_hijack_root_logger": False,
        }
    )

    # Ensure task modules are registered even if autodiscovery misses them
    celery_app.conf.imports = ("blog_search.tasks.search_history_cleanup",)
    celery_app.conf.task_routes = {
        "cleanup_search_history": {"queue": "maintenance"},
        "search_history_cleanup_dry_run": {"queue": "maintenance"},
    }
    celery_app.conf.beat_schedule = get_beat_schedule()

    return celery_app


@setup_logging.connect  # type: ignore[misc]
def config_loggers(*args: Any, **kwargs: Any) -> None:
    """Configure logging to integrate with the application's logging setup."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


celery_app = create_celery_app()


class BaseTask(Task):  # type: ignore[misc]
    """Base task that logs failures and retries."""

    def on_failure(self, exc: Exception, task_id: str, args: Any, kwargs: Any, einfo: Any) -> None:
        logger.error(f"Task {self.name}[{task_id}] failed with exception: {exc}", exc_info=True)
        super().on_failure(exc, task_id, args, kwargs, einfo)

    def on_retry(self, exc: Exception, task_id: str, args: Any, kwargs: Any, einfo: Any) -> None:
        logger.warning(f"Task {self.name}[{task_id}] retry {self.request.retries} due to: {exc}")
        super().on_retry(exc, task_id, args, kwargs, einfo)


celery_app.Task = cast(Type[Task], BaseTask)
