"""Shared constants for ProjectDesk.

This module contains constants that are used across multiple modules
to avoid duplication and ensure consistency.
"""

from enum import Enum


# =============================================================================
# Project Status
# =============================================================================

class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


# Human-readable labels used by chart data
STATUS_LABELS = {
    ProjectStatus.PENDING.value: "Pending",
    ProjectStatus.IN_PROGRESS.value: "In Progress",
    ProjectStatus.DONE.value: "Done",
    ProjectStatus.CANCELLED.value: "Cancelled",
}

# Pie chart palette, one colour per chart slice
STATUS_COLORS = ["#FF6384", "#36A2EB", "#4BC0C0", "#FFCE56"]

# =============================================================================
# Field Limits
# =============================================================================

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 255
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 2000

# =============================================================================
# Listing
# =============================================================================

SORTABLE_FIELDS = ["name", "status", "start_date", "end_date", "created_at", "updated_at"]
MAX_PAGE_LIMIT = 100

# =============================================================================
# Fallback Analysis
# =============================================================================

# IN_PROGRESS projects older than this are flagged as at risk
LONG_RUNNING_DAYS = 90

# =============================================================================
# AI Service Defaults
# =============================================================================

DEFAULT_AI_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_AI_MODEL = "deepseek-chat"
DEFAULT_AI_TIMEOUT_SECONDS = 30.0
DEFAULT_AI_MAX_TOKENS = 1500
DEFAULT_AI_TEMPERATURE = 0.7
DEFAULT_AI_TOP_P = 0.9

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_SECONDS = 1.0
DEFAULT_RETRY_CAP_SECONDS = 10.0

DEFAULT_RATE_LIMIT_MAX_REQUESTS = 50
DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 60.0
