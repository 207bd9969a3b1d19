"""Chart data API route: status distribution for the dashboard pie chart."""

import logging

from fastapi import APIRouter, Depends

from ...core.analysis.models import iso_timestamp
from ...core.constants import STATUS_COLORS, STATUS_LABELS, ProjectStatus
from ..core import success_response
from ..deps import get_project_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/charts", tags=["charts"])


@router.get("")
async def get_charts_data(pm=Depends(get_project_manager)):
    counts = pm.status_counts()

    pie_chart = {
        "labels": [STATUS_LABELS.get(status, status) for status in counts],
        "datasets": [{
            "data": list(counts.values()),
            "backgroundColor": STATUS_COLORS,
        }],
    }
    stats = {
        "total": sum(counts.values()),
        "completed": counts.get(ProjectStatus.DONE.value, 0),
        "in_progress": counts.get(ProjectStatus.IN_PROGRESS.value, 0),
        "pending": counts.get(ProjectStatus.PENDING.value, 0),
    }
    return success_response({
        "pie_chart": pie_chart,
        "stats": stats,
        "last_updated": iso_timestamp(),
    })
