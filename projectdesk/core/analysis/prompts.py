"""Prompt templates for portfolio analysis.

The section headings requested here must match parser.SECTION_MARKERS,
since the response is split on those exact strings.
"""

from datetime import datetime
from typing import Optional, Sequence

from .models import ProjectSnapshot

SYSTEM_PROMPT = (
    "You are an expert assistant for business project analysis. "
    "You provide valuable insights and practical recommendations based on data."
)

HEALTH_CHECK_PROMPT = 'Reply with "OK" if you are working.'


def _format_date(value: Optional[datetime]) -> str:
    if value is None:
        return "Not set"
    return value.date().isoformat()


def format_project(project: ProjectSnapshot, index: int) -> str:
    """Render one project as a numbered block for the prompt."""
    return (
        f"Project {index}:\n"
        f"       - Name: {project.name}\n"
        f"       - Status: {project.status}\n"
        f"       - Description: {project.description}\n"
        f"       - Start Date: {_format_date(project.start_date)}\n"
        f"       - End Date: {_format_date(project.end_date)}"
    )


def build_summary_prompt(projects: Sequence[ProjectSnapshot]) -> str:
    """Build the portfolio summary prompt.

    Args:
        projects: Projects to analyze, in display order
    """
    projects_summary = "\n\n".join(
        format_project(project, i) for i, project in enumerate(projects, start=1)
    )

    return f"""You are an expert in project management and business analysis.
Analyze the following list of projects and produce an executive summary that includes:

**SPECIFIC INSTRUCTIONS:**
1. **OVERVIEW**: Concise summary of the whole portfolio
2. **STATUS ANALYSIS**: Distribution and meaning of the current statuses
3. **TIMELINE TRENDS**: Patterns in dates and deadlines
4. **IDENTIFIED RISKS**: Potential problems or areas needing attention
5. **RECOMMENDATIONS**: 3-5 specific suggestions for improvement

**REQUIRED RESPONSE FORMAT:**
- Use markdown for readability
- Maximum 500 words
- Professional but accessible language
- Focused on actionable insights

**PROJECT DATA:**
{projects_summary}

Please produce an analysis that is useful for executive decision making:"""
