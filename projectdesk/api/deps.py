"""FastAPI dependencies for ProjectDesk.

Provides shared services via FastAPI's Depends() injection system.
"""

import logging

from fastapi import Request

logger = logging.getLogger(__name__)


async def get_project_manager(request: Request):
    """Get ProjectManager from app state."""
    return request.app.state.project_manager


async def get_analysis_engine(request: Request):
    """Get AnalysisEngine from app state."""
    return request.app.state.analysis_engine
