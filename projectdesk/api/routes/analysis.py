"""Portfolio analysis API routes (FastAPI).

Handlers are plain ``def`` so FastAPI runs them in its threadpool; the AI
client's retry waits block only the worker serving that request.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.analysis.models import iso_timestamp
from ..deps import get_analysis_engine, get_project_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.get("")
def get_analysis(
    engine=Depends(get_analysis_engine),
    pm=Depends(get_project_manager),
):
    """AI summary of all projects, or the rule-based report if the AI path fails."""
    projects = pm.list_snapshots()
    logger.info(f"Analysis requested for {len(projects)} projects")
    return engine.get_project_analysis(projects).to_dict()


@router.post("/regenerate")
def regenerate_analysis(
    engine=Depends(get_analysis_engine),
    pm=Depends(get_project_manager),
):
    """Force a new AI call."""
    return engine.regenerate_analysis(pm.list_snapshots()).to_dict()


@router.delete("/cache")
def clear_analysis_cache(engine=Depends(get_analysis_engine)):
    return engine.clear_cache()


@router.get("/health")
def analysis_health(engine=Depends(get_analysis_engine)):
    """Minimal single-attempt AI call plus the local rate-limit window; 503 when unreachable."""
    try:
        return engine.health_check()
    except Exception as e:
        logger.warning(f"AI health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "service": engine.ai_client.settings.model,
                "error": str(e),
                "rate_limit": engine.ai_client.rate_limit_status(),
                "timestamp": iso_timestamp(),
            },
        )
