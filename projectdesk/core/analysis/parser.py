"""Split free-text AI output into the five named sections.

Extraction is tolerant: each section runs from the end of its
marker to the first occurrence of the next expected marker anywhere in the
text, or to the end of the text. A missing marker yields None for that
section. Any unexpected failure yields None for the whole mapping.
"""

import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# (marker, section_id) in the order the prompt requests them
SECTION_MARKERS: List[Tuple[str, str]] = [
    ("OVERVIEW", "overview"),
    ("STATUS ANALYSIS", "status_analysis"),
    ("TIMELINE TRENDS", "timeline_trends"),
    ("IDENTIFIED RISKS", "risks"),
    ("RECOMMENDATIONS", "recommendations"),
]


def extract_section(text: str, start_marker: str, end_marker: Optional[str]) -> Optional[str]:
    """Return the text between start_marker and end_marker, stripped.

    Both markers are located by first occurrence. When the end marker sits
    before the start marker the two bounds are swapped rather than producing
    an empty slice.
    """
    start_index = text.find(start_marker)
    if start_index == -1:
        return None

    end_index = text.find(end_marker) if end_marker else len(text)
    if end_index == -1:
        end_index = len(text)

    lo, hi = sorted((start_index + len(start_marker), end_index))
    return text[lo:hi].strip()


def parse_sections(
    text: str,
    markers: List[Tuple[str, str]] = SECTION_MARKERS,
) -> Optional[Dict[str, Optional[str]]]:
    """Map each section id to its text (or None); None if parsing failed."""
    try:
        sections = {}
        for i, (marker, section_id) in enumerate(markers):
            next_marker = markers[i + 1][0] if i + 1 < len(markers) else None
            sections[section_id] = extract_section(text, marker, next_marker)
        return sections
    except Exception as e:
        logger.warning(f"Could not parse AI response into sections: {e}")
        return None


def count_words(text: str) -> int:
    return len(text.split())
