"""Project Manager for ProjectDesk.

Provides CRUD operations for projects with relational persistence, plus
the read models consumed by charts and portfolio analysis.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func

from ..constants import SORTABLE_FIELDS, ProjectStatus
from ..db import DatabaseManager
from ..db.models import Project, utcnow
from ..analysis.models import ProjectSnapshot

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("name", "description", "status", "start_date", "end_date")


class InvalidProjectData(ValueError):
    """A write would break a project invariant."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() + "Z" if value else None


def _check_dates(start_date: datetime, end_date: Optional[datetime]) -> None:
    if end_date is not None and end_date <= start_date:
        raise InvalidProjectData("end_date", "End date must be after the start date")


class ProjectManager:
    """Manages projects with database persistence."""

    def __init__(self, db_manager: DatabaseManager):
        self.db = db_manager
        logger.info("ProjectManager initialized")

    # =========================================================================
    # Project CRUD
    # =========================================================================

    def create_project(
        self,
        name: str,
        description: str,
        start_date: datetime,
        end_date: Optional[datetime] = None,
        status: str = ProjectStatus.PENDING.value,
    ) -> Dict:
        """Create a new project."""
        _check_dates(start_date, end_date)

        with self.db.get_session() as session:
            project = Project(
                name=name,
                description=description,
                status=status,
                start_date=start_date,
                end_date=end_date,
            )
            session.add(project)
            session.flush()

            logger.info(f"Created project: {project.id} ({name})")
            return self._project_to_dict(project)

    def get_project(self, project_id: int) -> Optional[Dict]:
        """Retrieve project details by ID."""
        with self.db.get_session() as session:
            project = session.get(Project, project_id)
            if not project:
                return None
            return self._project_to_dict(project)

    def list_projects(
        self,
        status: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Dict]:
        """List projects, newest first unless another ordering is requested."""
        if sort_by not in SORTABLE_FIELDS:
            raise InvalidProjectData("sort_by", f"Cannot sort by '{sort_by}'")

        with self.db.get_session() as session:
            query = session.query(Project)
            if status:
                query = query.filter(Project.status == status)

            column = getattr(Project, sort_by)
            ordering = column.asc() if sort_order.lower() == "asc" else column.desc()
            query = query.order_by(ordering, Project.id.desc())

            if limit:
                query = query.limit(limit)
                if page and page > 1:
                    query = query.offset((page - 1) * limit)

            return [self._project_to_dict(p) for p in query.all()]

    def count_projects(self, status: Optional[str] = None) -> int:
        with self.db.get_session() as session:
            query = session.query(func.count(Project.id))
            if status:
                query = query.filter(Project.status == status)
            return query.scalar() or 0

    def update_project(self, project_id: int, changes: Dict[str, Any]) -> Optional[Dict]:
        """Apply a partial update.

        Keys absent from `changes` are left untouched. `end_date` may be set
        to None to clear it; other fields ignore None.

        Returns:
            Updated project dict, or None if the project does not exist
        """
        with self.db.get_session() as session:
            project = session.get(Project, project_id)
            if not project:
                return None

            for field in _UPDATABLE_FIELDS:
                if field not in changes:
                    continue
                value = changes[field]
                if value is None and field != "end_date":
                    continue
                setattr(project, field, value)

            _check_dates(project.start_date, project.end_date)

            now = utcnow()
            project.updated_at = max(now, project.updated_at) if project.updated_at else now
            session.flush()

            logger.info(f"Updated project: {project_id} ({sorted(changes)})")
            return self._project_to_dict(project)

    def delete_project(self, project_id: int) -> bool:
        """Delete a project. Returns False if it does not exist."""
        with self.db.get_session() as session:
            project = session.get(Project, project_id)
            if not project:
                return False

            session.delete(project)
            logger.info(f"Deleted project: {project_id} ({project.name})")
            return True

    # =========================================================================
    # Read models
    # =========================================================================

    def list_snapshots(self) -> List[ProjectSnapshot]:
        """All projects as detached snapshots, newest first."""
        with self.db.get_session() as session:
            projects = session.query(Project).order_by(
                Project.created_at.desc(), Project.id.desc()
            ).all()
            return [
                ProjectSnapshot(
                    id=p.id,
                    name=p.name,
                    description=p.description or "",
                    status=p.status,
                    start_date=p.start_date,
                    end_date=p.end_date,
                )
                for p in projects
            ]

    def status_counts(self) -> Dict[str, int]:
        """Project count per status (only statuses that occur)."""
        with self.db.get_session() as session:
            return dict(
                session.query(Project.status, func.count(Project.id))
                .group_by(Project.status)
                .all()
            )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _project_to_dict(project: Project) -> Dict:
        return {
            "id": project.id,
            "name": project.name,
            "description": project.description or "",
            "status": project.status,
            "start_date": _iso(project.start_date),
            "end_date": _iso(project.end_date),
            "created_at": _iso(project.created_at),
            "updated_at": _iso(project.updated_at),
        }
