"""ProjectDesk - project portfolio tracking with AI-generated summaries."""

__version__ = "1.0.0"
