"""Analysis Engine: orchestrator for portfolio summaries.

Decides between the AI client and the rule-based fallback and is the one
place where AI-path failures turn into a successful, degraded response.

Per request:
    START -> EMPTY     -> fallback empty state
          -> NONEMPTY  -> CALL_AI -> SUCCESS -> AI result
                                  -> FAILURE -> fallback analysis + error note
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence

from .client import AIClient
from .errors import user_message_for
from .fallback import empty_state_result, generate_basic_analysis
from .models import AnalysisResult, ProjectSnapshot, iso_timestamp

logger = logging.getLogger(__name__)


class AnalysisEngine:
    """Public API consumed by the analysis routes.

    Public API:
        get_project_analysis(projects) -> AnalysisResult
        regenerate_analysis(projects) -> AnalysisResult
        clear_cache() -> acknowledgement dict
        health_check() -> AI reachability dict (raises if unreachable)
    """

    def __init__(self, ai_client: AIClient, clock: Optional[Callable[[], datetime]] = None):
        self._ai = ai_client
        self._clock = clock

    @property
    def ai_client(self) -> AIClient:
        return self._ai

    def get_project_analysis(self, projects: Sequence[ProjectSnapshot]) -> AnalysisResult:
        """AI summary of the portfolio, degrading to the rule-based report."""
        if not projects:
            logger.info("No projects to analyze; returning onboarding message")
            return empty_state_result()

        return self._run(projects, note_prefix="AI service temporarily unavailable")

    def regenerate_analysis(self, projects: Sequence[ProjectSnapshot]) -> AnalysisResult:
        """Force a fresh AI call, bypassing any cache layer."""
        logger.info(f"Regenerating analysis for {len(projects)} projects")
        if not projects:
            return empty_state_result()

        return self._run(projects, note_prefix="Could not regenerate analysis")

    def clear_cache(self) -> Dict[str, Any]:
        """Acknowledge a cache clear. No cache layer exists yet."""
        logger.info("Analysis cache cleared")
        return {
            "message": "Analysis cache cleared successfully",
            "timestamp": iso_timestamp(),
        }

    def health_check(self) -> Dict[str, Any]:
        return self._ai.check_health()

    # ── Internals ───────────────────────────────────────────────────────

    def _run(self, projects: Sequence[ProjectSnapshot], note_prefix: str) -> AnalysisResult:
        try:
            result = self._ai.request_summary(projects)
            logger.info(f"AI analysis generated ({result.word_count} words)")
            return result
        except Exception as e:
            logger.warning(
                f"AI analysis failed ({type(e).__name__}: {e}); using rule-based fallback"
            )
            now = self._clock() if self._clock else None
            fallback = generate_basic_analysis(projects, now=now)
            return fallback.with_error_note(f"{note_prefix}: {user_message_for(e)}")
