"""Portfolio analysis: AI client, rule-based fallback and the orchestrating engine."""

from .client import AIClient
from .engine import AnalysisEngine
from .errors import (
    AIServiceError,
    AnalysisError,
    AuthenticationError,
    ErrorKind,
    RateLimitExceeded,
    TransientUpstreamError,
)
from .models import AnalysisResult, ProjectSnapshot
from .rate_limit import RateLimitWindow

__all__ = [
    "AIClient",
    "AnalysisEngine",
    "AnalysisResult",
    "ProjectSnapshot",
    "RateLimitWindow",
    "AIServiceError",
    "AnalysisError",
    "AuthenticationError",
    "ErrorKind",
    "RateLimitExceeded",
    "TransientUpstreamError",
]
