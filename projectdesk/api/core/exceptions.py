"""Domain exceptions for the HTTP layer.

Raised from route handlers and rendered by the exception handlers
registered in ``create_app``.
"""

from typing import Any, Dict, List, Optional


class ProjectDeskError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(ProjectDeskError):
    """Request data failed validation (400)."""

    status_code = 400
    error = "Validation error"

    def __init__(
        self,
        message: str = "Invalid input data",
        field: Optional[str] = None,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        if details is None and field:
            details = [{"field": field, "message": message}]
        super().__init__(message, details)
        self.field = field


class NotFoundError(ProjectDeskError):
    """Requested resource does not exist (404)."""

    status_code = 404
    error = "Not found"

    def __init__(self, resource: str = "Resource", resource_id: Optional[Any] = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class ServiceUnavailableError(ProjectDeskError):
    """A dependency (database, AI service) is not reachable (503)."""

    status_code = 503
    error = "Service unavailable"
