"""Data contracts for portfolio analysis.

Kept as dataclasses (not ORM models) for transport between layers.
"""

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional

from ..db.models import utcnow


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with a trailing Z."""
    return (moment or utcnow()).isoformat(timespec="milliseconds") + "Z"


@dataclass(frozen=True)
class ProjectSnapshot:
    """Detached, read-only view of a project used by the analysis core."""
    name: str
    status: str
    start_date: datetime
    end_date: Optional[datetime] = None
    description: str = ""
    id: Optional[int] = None


@dataclass
class AnalysisResult:
    """Outcome of one analysis request, from the AI path or the fallback.

    Never persisted; recomputed per request.
    """
    raw_text: str
    structured_sections: Optional[Dict[str, Any]] = None
    timestamp: str = field(default_factory=iso_timestamp)
    is_fallback: bool = False
    error_note: Optional[str] = None
    word_count: Optional[int] = None

    def with_error_note(self, note: str) -> "AnalysisResult":
        return replace(self, error_note=note)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
