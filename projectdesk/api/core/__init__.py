"""API Core - Shared utilities for API routes.

This package provides:
- Unified response builders (success_response, error_response)
- Domain exceptions (ValidationError, NotFoundError, etc.)

Usage:
    from projectdesk.api.core import success_response, error_response
    from projectdesk.api.core.exceptions import ValidationError
"""

from .response import (
    success_response,
    error_response,
)

from .exceptions import (
    ProjectDeskError,
    ValidationError,
    NotFoundError,
    ServiceUnavailableError,
)

__all__ = [
    # Response utilities
    "success_response",
    "error_response",
    # Exceptions
    "ProjectDeskError",
    "ValidationError",
    "NotFoundError",
    "ServiceUnavailableError",
]
