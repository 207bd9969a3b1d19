"""
SQLAlchemy ORM Models for ProjectDesk

- Project: a tracked project with status and planned dates
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, Column, Index, Integer, String, Text, TIMESTAMP,
)
from sqlalchemy.orm import declarative_base

from ..constants import ProjectStatus

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how TIMESTAMP columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# =============================================================================
# Project Model
# =============================================================================

class Project(Base):
    """A project in the portfolio."""
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(
            "end_date IS NULL OR end_date > start_date",
            name="ck_projects_end_after_start",
        ),
        Index('idx_projects_created_at', 'created_at'),
        Index('idx_projects_status', 'status'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)  # stored HTML-escaped, can exceed NAME_MAX_LENGTH
    description = Column(Text, nullable=False, default="")
    status = Column(String(20), default=ProjectStatus.PENDING.value,
                    server_default=ProjectStatus.PENDING.value, nullable=False)  # PENDING, IN_PROGRESS, DONE, CANCELLED
    start_date = Column(TIMESTAMP, nullable=False)
    end_date = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Project(id={self.id}, name='{self.name}', status='{self.status}')>"
