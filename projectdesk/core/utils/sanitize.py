"""String sanitization applied to request fields before they are stored.

Pure string transforms; called from request-schema validators, never from
the analysis core.
"""

import re

_ESCAPES = str.maketrans({
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})

_ANGLE_BRACKETS = re.compile(r"[<>]")


def escape_html(value: str) -> str:
    """Replace HTML-significant characters with entities (single pass)."""
    return value.translate(_ESCAPES)


def strip_angle_brackets(value: str) -> str:
    return _ANGLE_BRACKETS.sub("", value)


def clean_text(value: str) -> str:
    """Trim, escape, then strip any remaining angle brackets."""
    return strip_angle_brackets(escape_html(value.strip()))
