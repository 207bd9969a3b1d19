"""Sample data for local development."""

import logging
from datetime import datetime

from .db import DatabaseManager
from .models import Project

logger = logging.getLogger(__name__)

SAMPLE_PROJECTS = [
    {
        "name": "Project Management System",
        "description": "Full-stack platform for managing projects with a React frontend, REST API and relational storage.",
        "status": "IN_PROGRESS",
        "start_date": datetime(2024, 1, 15),
        "end_date": datetime(2024, 6, 30),
    },
    {
        "name": "Delivery Mobile App",
        "description": "Mobile application for a delivery service with live order tracking.",
        "status": "PENDING",
        "start_date": datetime(2024, 2, 1),
        "end_date": None,
    },
    {
        "name": "News Portal",
        "description": "News portal with dynamic content and a comment system.",
        "status": "DONE",
        "start_date": datetime(2024, 1, 1),
        "end_date": datetime(2024, 1, 10),
    },
    {
        "name": "Internal Management System",
        "description": "Internal system for managing employees and company resources.",
        "status": "CANCELLED",
        "start_date": datetime(2024, 1, 5),
        "end_date": None,
    },
]


def seed_sample_projects(db_manager: DatabaseManager, reset: bool = True) -> int:
    """Insert SAMPLE_PROJECTS, optionally wiping the table first.

    Returns:
        Number of projects inserted
    """
    with db_manager.get_session() as session:
        if reset:
            deleted = session.query(Project).delete()
            logger.info(f"Removed {deleted} existing projects")

        for data in SAMPLE_PROJECTS:
            session.add(Project(**data))

    logger.info(f"Seeded {len(SAMPLE_PROJECTS)} sample projects")
    return len(SAMPLE_PROJECTS)
