from typing import List, Optional

from blog_api.core.response.schemas import ErrorDetail


class ServiceException(Exception):
    """Base exception raised by services."""

    def __init__(self, detail: str, error_details: Optional[List[ErrorDetail]] = None):
        super().__init__(detail)
        self.detail = detail
        self.error_details = error_details or []


class NotFoundException(ServiceException):
    """Requested item does not exist."""


class ValidationException(ServiceException):
    """Request is well formed but cannot be applied."""
