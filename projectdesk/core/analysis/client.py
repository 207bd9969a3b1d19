"""AI Client: portfolio summaries from an OpenAI-compatible chat endpoint.

Features:
- Fixed-window rate limiting before any outbound call
- Prompt construction from project snapshots
- Retry with capped exponential backoff (transient failures only)
- Tolerant parsing of the markdown answer into named sections
- Error classification into fixed user-facing messages
"""

import logging
from typing import Any, Dict, Iterator, Optional, Sequence

import backoff
import httpx

from ...setting import AISettings
from .errors import (
    AuthenticationError,
    ErrorKind,
    TransientUpstreamError,
    user_message_for,
    wrap_transport_error,
)
from .fallback import empty_state_result
from .models import AnalysisResult, ProjectSnapshot, iso_timestamp
from .parser import count_words, parse_sections
from .prompts import HEALTH_CHECK_PROMPT, SYSTEM_PROMPT, build_summary_prompt
from .rate_limit import RateLimitWindow

logger = logging.getLogger(__name__)

COMPLETIONS_PATH = "/chat/completions"


def retry_delay(attempt: int, base_seconds: float, cap_seconds: float) -> float:
    """Wait after failed attempt number `attempt` (1-based)."""
    return min(base_seconds * (2 ** attempt), cap_seconds)


def capped_expo(base_seconds: float, cap_seconds: float) -> Iterator[Optional[float]]:
    """backoff wait generator yielding retry_delay(1), retry_delay(2), ..."""
    # backoff primes the generator with send(None) before the first wait
    yield None
    attempt = 1
    while True:
        yield retry_delay(attempt, base_seconds, cap_seconds)
        attempt += 1


class AIClient:
    """Client for the generative text service.

    One instance owns one RateLimitWindow; share the instance (via
    app.state) to share the budget across requests.

    Usage:
        client = AIClient(get_settings().ai)
        result = client.generate_project_summary(snapshots)
    """

    def __init__(
        self,
        settings: AISettings,
        http_client: Optional[httpx.Client] = None,
        rate_limiter: Optional[RateLimitWindow] = None,
    ):
        self.settings = settings
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
        )
        self.rate_limiter = rate_limiter or RateLimitWindow(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
        logger.info(
            f"AIClient initialized (model={settings.model}, "
            f"max_retries={settings.max_retries}, "
            f"rate_limit={settings.rate_limit_max_requests}/{settings.rate_limit_window_seconds:.0f}s)"
        )

    # ── Public API ──────────────────────────────────────────────────────

    def generate_project_summary(self, projects: Sequence[ProjectSnapshot]) -> AnalysisResult:
        """Best-effort summary; never raises.

        Failures come back as an AnalysisResult with is_fallback=True and
        error_note set to the classified user message.
        """
        try:
            return self.request_summary(projects)
        except Exception as e:
            logger.error(f"AI summary generation failed: {type(e).__name__}: {e}")
            return self.handle_ai_error(e)

    def request_summary(self, projects: Sequence[ProjectSnapshot]) -> AnalysisResult:
        """Strict summary path.

        Raises:
            RateLimitExceeded: local budget spent; no network call was made
            AuthenticationError: credentials missing or rejected
            TransientUpstreamError: retries exhausted
        """
        if not projects:
            return empty_state_result()

        self.rate_limiter.acquire()
        prompt = build_summary_prompt(projects)
        raw = self.execute_with_retry(prompt)
        return self.parse_ai_response(raw)

    def execute_with_retry(self, prompt: str, max_retries: Optional[int] = None) -> str:
        """Send prompt, retrying transient failures with capped exponential backoff.

        Args:
            prompt: User message content
            max_retries: Total attempts (at least 1); defaults to settings.max_retries

        Returns:
            Text content of the first completion choice
        """
        max_tries = self.settings.max_retries if max_retries is None else max_retries
        if max_tries < 1:
            raise ValueError(f"max_retries must be at least 1, got {max_tries}")

        @backoff.on_exception(
            capped_expo,
            TransientUpstreamError,
            max_tries=max_tries,
            jitter=None,
            on_backoff=self._on_retry,
            base_seconds=self.settings.retry_base_seconds,
            cap_seconds=self.settings.retry_cap_seconds,
        )
        def _do_call():
            return self._send(prompt)

        return _do_call()

    def parse_ai_response(self, raw: str) -> AnalysisResult:
        """Wrap raw model output; sections degrade to None if parsing fails."""
        return AnalysisResult(
            raw_text=raw,
            structured_sections=parse_sections(raw),
            is_fallback=False,
            word_count=count_words(raw),
        )

    def handle_ai_error(self, error: BaseException) -> AnalysisResult:
        """Turn any AI-path failure into a labelled placeholder result."""
        message = user_message_for(error)
        return AnalysisResult(
            raw_text=(
                f"## Analysis Unavailable\n\n{message}\n\n"
                "**Suggestion:** Please try again in a few minutes."
            ),
            structured_sections=None,
            is_fallback=True,
            error_note=message,
        )

    def check_health(self) -> Dict[str, Any]:
        """Single-attempt minimal call. Raises on failure."""
        response = self.execute_with_retry(HEALTH_CHECK_PROMPT, max_retries=1)
        return {
            "status": "healthy",
            "service": self.settings.model,
            "response": response[:50] + "...",
            "rate_limit": self.rate_limit_status(),
            "timestamp": iso_timestamp(),
        }

    def rate_limit_status(self) -> Dict[str, Any]:
        return self.rate_limiter.snapshot()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # ── Transport ───────────────────────────────────────────────────────

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.settings.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
            "top_p": self.settings.top_p,
        }

    def _send(self, prompt: str) -> str:
        """One outbound attempt, with failures mapped onto the error taxonomy."""
        if not self.settings.api_key:
            raise AuthenticationError("AI API key is not configured")

        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = self._http.post(
                COMPLETIONS_PATH, json=self._build_payload(prompt), headers=headers
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise wrap_transport_error(e) from e
        except ValueError as e:
            raise TransientUpstreamError(
                f"AI service returned invalid JSON: {e}", ErrorKind.UNKNOWN_TRANSIENT
            ) from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise TransientUpstreamError(
                "AI service response has no completion choice", ErrorKind.UNKNOWN_TRANSIENT
            ) from e

        if not isinstance(content, str):
            raise TransientUpstreamError(
                "AI service completion has no text content", ErrorKind.UNKNOWN_TRANSIENT
            )
        return content

    def _on_retry(self, details: dict):
        """Log retry events."""
        exc = details.get("exception")
        logger.warning(
            f"AI call attempt {details['tries']} failed "
            f"({type(exc).__name__}: {exc}); retrying in {details['wait']:.1f}s"
        )
