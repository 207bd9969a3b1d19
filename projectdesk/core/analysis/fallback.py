"""Rule-based portfolio summary used when the AI service is unavailable.

Every function here is pure and total: no I/O, no exceptions for any
sequence of projects. The current time is a parameter so reports are
deterministic under test.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from ..constants import LONG_RUNNING_DAYS, ProjectStatus
from ..db.models import utcnow
from .models import AnalysisResult, ProjectSnapshot

PENDING = ProjectStatus.PENDING.value
IN_PROGRESS = ProjectStatus.IN_PROGRESS.value
DONE = ProjectStatus.DONE.value

EMPTY_STATE_TEXT = """## Welcome to Project Analysis

There are currently no projects to analyze.

**To get started:**
1. Add new projects using the form
2. Set realistic statuses and dates
3. Come back to this section for an intelligent analysis

**Benefits of AI analysis:**
- Proactive risk identification
- Personalized recommendations
- Trend insights
- Resource optimization"""

HEALTHY_RECOMMENDATION = "• The portfolio looks to be in good overall shape"


def compute_state_distribution(projects: Sequence[ProjectSnapshot]) -> Dict[str, int]:
    """Count projects per status; only statuses that occur appear as keys."""
    distribution: Dict[str, int] = {}
    for project in projects:
        distribution[project.status] = distribution.get(project.status, 0) + 1
    return distribution


def compute_timeline_stats(projects: Sequence[ProjectSnapshot], now: datetime) -> Dict[str, int]:
    upcoming = sum(1 for p in projects if p.end_date is not None and p.end_date > now)
    overdue = sum(
        1 for p in projects
        if p.end_date is not None and p.end_date < now and p.status != DONE
    )
    return {"upcoming_deadlines": upcoming, "overdue_projects": overdue}


def _is_at_risk(project: ProjectSnapshot, now: datetime) -> bool:
    if project.end_date is None:
        return True
    if project.end_date < now and project.status != DONE:
        return True
    if project.status == IN_PROGRESS and now - project.start_date > timedelta(days=LONG_RUNNING_DAYS):
        return True
    return False


def identify_risk_projects(projects: Sequence[ProjectSnapshot], now: datetime) -> List[str]:
    """Names of at-risk projects, in input order.

    A project is at risk when it has no end date, is past its end date
    without being DONE, or has been IN_PROGRESS for over LONG_RUNNING_DAYS.
    """
    return [p.name for p in projects if _is_at_risk(p, now)]


def generate_recommendations(distribution: Dict[str, int], risks: Sequence[str]) -> List[str]:
    """Apply the recommendation rules in fixed order. Never returns an empty list."""
    recommendations = []

    if distribution.get(PENDING, 0) > distribution.get(IN_PROGRESS, 0):
        recommendations.append("• Consider starting more pending projects to balance the workload")

    if risks:
        recommendations.append(f"• Review the {len(risks)} projects flagged with potential risks")

    if distribution.get(DONE, 0) < 2:
        recommendations.append("• Focus on finishing projects to demonstrate progress")

    return recommendations or [HEALTHY_RECOMMENDATION]


def format_basic_analysis(
    distribution: Dict[str, int],
    timeline: Dict[str, int],
    risks: Sequence[str],
    recommendations: Sequence[str],
) -> str:
    """Markdown rendering of the rule-based report."""
    distribution_lines = "\n".join(
        f"- **{status}**: {count} projects" for status, count in distribution.items()
    )
    risk_lines = "\n".join(f"- {name}" for name in risks) if risks else "- No critical risks identified"

    return f"""## Basic Project Analysis

### Status Distribution
{distribution_lines}

### Deadline Status
- **Upcoming deadlines**: {timeline["upcoming_deadlines"]} projects
- **Overdue projects**: {timeline["overdue_projects"]} projects

### Projects at Risk
{risk_lines}

### Recommendations
{chr(10).join(recommendations)}

*Note: This is a basic automatic analysis. For deeper insights, use the AI service when it is available.*"""


def empty_state_result() -> AnalysisResult:
    """Onboarding message returned when there is nothing to analyze."""
    return AnalysisResult(
        raw_text=EMPTY_STATE_TEXT,
        structured_sections=None,
        is_fallback=True,
    )


def generate_basic_analysis(
    projects: Sequence[ProjectSnapshot],
    now: Optional[datetime] = None,
) -> AnalysisResult:
    """Build the full rule-based report for a project collection."""
    if not projects:
        return empty_state_result()

    now = now or utcnow()
    distribution = compute_state_distribution(projects)
    timeline = compute_timeline_stats(projects, now)
    risks = identify_risk_projects(projects, now)
    recommendations = generate_recommendations(distribution, risks)

    return AnalysisResult(
        raw_text=format_basic_analysis(distribution, timeline, risks, recommendations),
        structured_sections={
            "state_distribution": distribution,
            "timeline": timeline,
            "risk_projects": risks,
            "recommendations": recommendations,
        },
        is_fallback=True,
    )
