"""
Database module for ProjectDesk.

Exports:
- DatabaseManager: Database connection and session management
- get_database_manager: Factory function for DatabaseManager
- wait_for_db: Database availability checker with retry logic
- seed_sample_projects: Development seed data
- Models: Project
- Base: SQLAlchemy declarative base
"""

from .db import DatabaseManager, get_database_manager, wait_for_db
from .models import Base, Project, utcnow
from .seed import seed_sample_projects

__all__ = [
    # Database management
    "DatabaseManager",
    "get_database_manager",
    "wait_for_db",
    "seed_sample_projects",

    # ORM models
    "Base",
    "Project",
    "utcnow",
]
