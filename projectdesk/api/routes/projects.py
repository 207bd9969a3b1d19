"""Project management API routes (FastAPI).

Provides CRUD operations over projects with validated, sanitized input.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from ...core.constants import MAX_PAGE_LIMIT, SORTABLE_FIELDS, ProjectStatus
from ...core.project import InvalidProjectData
from ..core import NotFoundError, ValidationError, success_response
from ..deps import get_project_manager
from ..schemas import ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])

_SORT_PATTERN = "^(" + "|".join(SORTABLE_FIELDS) + ")$"


# ── Routes ───────────────────────────────────────────────────────────────

@router.get("")
async def list_projects(
    status: Optional[ProjectStatus] = Query(None),
    sort_by: str = Query("created_at", pattern=_SORT_PATTERN),
    sort_order: str = Query("desc", pattern="^(asc|desc|ASC|DESC)$"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_LIMIT),
    pm=Depends(get_project_manager),
):
    """List projects, newest first by default."""
    status_value = status.value if status else None
    projects = pm.list_projects(
        status=status_value,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    data = [ProjectResponse(**p).model_dump() for p in projects]
    return success_response(data, count=len(data), total=pm.count_projects(status_value))


@router.get("/{project_id}")
async def get_project(
    project_id: int = Path(..., ge=1),
    pm=Depends(get_project_manager),
):
    """Get project details by ID."""
    project = pm.get_project(project_id)
    if not project:
        raise NotFoundError("Project", project_id)
    return success_response(ProjectResponse(**project).model_dump())


@router.post("", status_code=201)
async def create_project(
    data: ProjectCreate,
    pm=Depends(get_project_manager),
):
    """Create a new project."""
    try:
        project = pm.create_project(
            name=data.name,
            description=data.description,
            status=data.status.value,
            start_date=data.start_date,
            end_date=data.end_date,
        )
    except InvalidProjectData as e:
        raise ValidationError(e.message, field=e.field)
    return success_response(
        ProjectResponse(**project).model_dump(),
        message="Project created successfully",
        status_code=201,
    )


@router.put("/{project_id}")
async def update_project(
    data: ProjectUpdate,
    project_id: int = Path(..., ge=1),
    pm=Depends(get_project_manager),
):
    """Update the fields present in the body."""
    try:
        project = pm.update_project(project_id, data.changes())
    except InvalidProjectData as e:
        raise ValidationError(e.message, field=e.field)
    if not project:
        raise NotFoundError("Project", project_id)
    return success_response(
        ProjectResponse(**project).model_dump(),
        message="Project updated successfully",
    )


@router.delete("/{project_id}")
async def delete_project(
    project_id: int = Path(..., ge=1),
    pm=Depends(get_project_manager),
):
    """Delete a project."""
    if not pm.delete_project(project_id):
        raise NotFoundError("Project", project_id)
    return success_response(message="Project deleted successfully")
