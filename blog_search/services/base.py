# blog_search/services/base.py
"""
Base Service Pattern for the blog search service.

Provides common functionality for all service classes including:
- Transaction management
- Logging
- Performance monitoring
"""

import asyncio
from contextlib import contextmanager
from functools import wraps
import logging
import time
from typing import Any, Callable, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import ServiceException
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

SLOW_OPERATION_SECONDS = 1.0


class BaseService:
    """
    Base class for all service layer components.

    Provides common patterns for:
    - Database session management
    - Logging
    - Transaction handling
    - Performance monitoring
    """

    def __init__(self, db: Optional[Session] = None):
        """
        Initialize base service.

        Args:
            db: Database session. Services that open their own sessions per
                unit of work pass None.
        """
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self):
        """
        Context manager for database transactions.

        Usage:
            with self.transaction():
                self.repository.delete_user_searches(user_id)
                # commit is handled automatically
        """
        if self.db is None:
            raise ServiceException("No database session bound to service")
        try:
            yield self.db
            self.db.commit()
            self.logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            self.logger.error(f"Transaction failed: {str(e)}")
            self.db.rollback()
            raise ServiceException(f"Database operation failed: {str(e)}")
        except Exception as e:
            self.logger.error(f"Unexpected error in transaction: {str(e)}")
            self.db.rollback()
            raise

    def _finish_measurement(
        self, operation_name: str, elapsed: float, success: bool, error_type: Optional[str]
    ) -> None:
        if elapsed > SLOW_OPERATION_SECONDS:
            self.logger.warning(f"Slow operation detected: {operation_name} took {elapsed:.2f}s")

        try:
            prometheus_metrics.record_service_operation(
                service=self.__class__.__name__,
                operation=operation_name,
                duration=elapsed,
                status="success" if success else "error",
                error_type=error_type,
            )
        except Exception as e:
            # Metrics must never break the operation being measured
            self.logger.debug(f"Failed to record metrics for {operation_name}: {e}")

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorator to measure operation performance.

        Usage:
            @BaseService.measure_operation("search")
            def search(self, criteria):
                ...

        Works for both plain and ``async def`` methods.
        """

        def decorator(func: F) -> F:
            if asyncio.iscoroutinefunction(func):

                @wraps(func)
                async def async_wrapper(self, *args, **kwargs):
                    start_time = time.time()
                    success = False
                    error_type = None
                    try:
                        result = await func(self, *args, **kwargs)
                        success = True
                        return result
                    except Exception as e:
                        error_type = type(e).__name__
                        raise
                    finally:
                        self._finish_measurement(
                            operation_name, time.time() - start_time, success, error_type
                        )

                return cast(F, async_wrapper)

            @wraps(func)
            def wrapper(self, *args, **kwargs):
                start_time = time.time()
                success = False
                error_type = None
                try:
                    result = func(self, *args, **kwargs)
                    success = True
                    return result
                except Exception as e:
                    error_type = type(e).__name__
                    raise
                finally:
                    self._finish_measurement(
                        operation_name, time.time() - start_time, success, error_type
                    )

            return cast(F, wrapper)

        return decorator
