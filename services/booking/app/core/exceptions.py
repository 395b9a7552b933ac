"""
Domain exceptions raised by the booking core.

Services raise these and never build HTTP responses themselves; the API layer
translates them through ``register_exception_handlers``.
"""

from typing import Any, Dict, Optional

from fastapi import status


class DomainException(Exception):
    """Base exception for business-rule rejections."""

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
    """Malformed or missing input (missing timezone, wrong number of days...)."""

    status_code = status.HTTP_400_BAD_REQUEST


class BadRequestException(DomainException):
    """Well formed input that breaks a business rule (past date, wrong state)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """A venue, slot or booking does not exist for the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Double booking, duplicate review or an already applied transition."""

    status_code = status.HTTP_409_CONFLICT


__all__ = [
    "DomainException",
    "ValidationException",
    "BadRequestException",
    "NotFoundException",
    "ConflictException",
]
