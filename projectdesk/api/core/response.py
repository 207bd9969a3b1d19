"""Unified response envelopes.

Success: ``{"success": true, "data": ..., "message"?: ...}``
Error:   ``{"success": false, "error": ..., "message": ..., "details"?: ...}``
"""

from typing import Any, Optional

from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
    **extra: Any,
) -> JSONResponse:
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def error_response(
    error: str,
    status_code: int = 400,
    message: Optional[str] = None,
    details: Optional[Any] = None,
) -> JSONResponse:
    body = {"success": False, "error": error, "message": message or error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)

