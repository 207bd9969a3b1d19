"""Utility modules for the projectdesk core package.

This package contains shared utility functions used across the codebase.
"""

from .sanitize import clean_text, escape_html, strip_angle_brackets

__all__ = ["clean_text", "escape_html", "strip_angle_brackets"]
