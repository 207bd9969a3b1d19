"""Failure taxonomy for the AI analysis path.

RateLimitExceeded is raised locally before any network call. Everything
the upstream service can do wrong becomes an AIServiceError subclass:
TransientUpstreamError is retried, AuthenticationError is not. Response
parsing never raises.
"""

from enum import Enum
from typing import Optional

import httpx


class ErrorKind(Enum):
    """Classification of an AI-path failure."""
    CONNECTION_UNAVAILABLE = "connection_unavailable"
    TIMEOUT = "timeout"
    RATE_LIMITED_UPSTREAM = "rate_limited_upstream"
    AUTHENTICATION_FAILED = "authentication_failed"
    UPSTREAM_INTERNAL_ERROR = "upstream_internal_error"
    UNKNOWN_TRANSIENT = "unknown_transient"
    LOCAL_RATE_LIMIT = "local_rate_limit"


USER_MESSAGES = {
    ErrorKind.CONNECTION_UNAVAILABLE: "The AI service is not reachable",
    ErrorKind.TIMEOUT: "The connection to the AI service timed out",
    ErrorKind.RATE_LIMITED_UPSTREAM: "AI service rate limit exceeded. Try again in one minute",
    ErrorKind.AUTHENTICATION_FAILED: "Authentication with the AI service failed",
    ErrorKind.UPSTREAM_INTERNAL_ERROR: "The AI service reported an internal error",
    ErrorKind.UNKNOWN_TRANSIENT: "The AI service is temporarily unavailable",
    ErrorKind.LOCAL_RATE_LIMIT: "Analysis request limit reached. Please wait a moment",
}


class AnalysisError(Exception):
    """Base class for AI-path failures."""
    kind: ErrorKind = ErrorKind.UNKNOWN_TRANSIENT

    @property
    def user_message(self) -> str:
        return USER_MESSAGES[self.kind]


class RateLimitExceeded(AnalysisError):
    """Local request budget for the current window is used up."""
    kind = ErrorKind.LOCAL_RATE_LIMIT


class AIServiceError(AnalysisError):
    """The upstream generative service call failed."""

    def __init__(self, message: str, kind: ErrorKind, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class TransientUpstreamError(AIServiceError):
    """Network, timeout, throttling or server-side failure; worth retrying."""


class AuthenticationError(AIServiceError):
    """Credentials were rejected or are missing; retrying cannot help."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, ErrorKind.AUTHENTICATION_FAILED, status_code)


def classify_status(status_code: int) -> ErrorKind:
    """Map an upstream HTTP status to an ErrorKind."""
    if status_code == 429:
        return ErrorKind.RATE_LIMITED_UPSTREAM
    if status_code in (401, 403):
        return ErrorKind.AUTHENTICATION_FAILED
    if status_code >= 500:
        return ErrorKind.UPSTREAM_INTERNAL_ERROR
    return ErrorKind.UNKNOWN_TRANSIENT


def classify_error(error: BaseException) -> ErrorKind:
    """Map any exception raised on the AI path to an ErrorKind."""
    if isinstance(error, AnalysisError):
        return error.kind
    if isinstance(error, httpx.TimeoutException):
        return ErrorKind.TIMEOUT
    if isinstance(error, httpx.NetworkError):
        return ErrorKind.CONNECTION_UNAVAILABLE
    if isinstance(error, httpx.HTTPStatusError):
        return classify_status(error.response.status_code)
    if isinstance(error, TimeoutError):
        return ErrorKind.TIMEOUT
    if isinstance(error, ConnectionError):
        return ErrorKind.CONNECTION_UNAVAILABLE
    return ErrorKind.UNKNOWN_TRANSIENT


def user_message_for(error: BaseException) -> str:
    return USER_MESSAGES[classify_error(error)]


def wrap_transport_error(error: httpx.HTTPError) -> AIServiceError:
    """Convert an httpx failure into the taxonomy."""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        kind = classify_status(status)
        if kind is ErrorKind.AUTHENTICATION_FAILED:
            return AuthenticationError(f"AI service rejected credentials (HTTP {status})", status)
        return TransientUpstreamError(f"AI service returned HTTP {status}", kind, status)
    return TransientUpstreamError(
        f"{type(error).__name__}: {error}", classify_error(error)
    )
