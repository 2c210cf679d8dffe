# blog_search/core/exceptions.py
"""
Domain-specific exceptions for the blog search service.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when request values cannot be interpreted."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field} if field else {},
        )
        self.field = field


class UnauthorizedException(DomainException):
    """Raised when an endpoint needs an authenticated actor and has none."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message=message, code="AUTH_REQUIRED")


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def __init__(self, message: str = "An error occurred processing your request") -> None:
        super().__init__(message=message, code="SERVICE_ERROR")


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues or query failures.
    """
