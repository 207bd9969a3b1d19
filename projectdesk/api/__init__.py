"""
REST API module for ProjectDesk.

Provides FastAPI endpoints for:
- Project management
- Portfolio analysis (AI with rule-based fallback)
- Dashboard chart data
"""
