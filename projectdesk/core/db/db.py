"""Database connection and session management for ProjectDesk."""

import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from sqlalchemy import create_engine, func, inspect, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base, Project, utcnow

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the SQLAlchemy engine and hands out transactional sessions."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        engine_kwargs = {"echo": echo}

        if database_url.startswith("sqlite"):
            # Sessions are used from FastAPI's worker threads
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.engine = create_engine(database_url, **engine_kwargs)
        self._session_factory = sessionmaker(
            bind=self.engine, expire_on_commit=False
        )
        logger.info(f"DatabaseManager initialized ({self.engine.dialect.name})")

    def init_db(self) -> None:
        """Create all tables (safe to call multiple times)."""
        Base.metadata.create_all(self.engine)
        logger.info("Database schema ensured")

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> Dict:
        """Check connectivity, table presence and row count."""
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
                table_exists = inspect(self.engine).has_table(Project.__tablename__)
                project_count = 0
                if table_exists:
                    project_count = session.query(func.count(Project.id)).scalar() or 0

            return {
                "status": "healthy",
                "database": "connected",
                "table_exists": table_exists,
                "project_count": project_count,
                "timestamp": utcnow().isoformat() + "Z",
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(e),
                "timestamp": utcnow().isoformat() + "Z",
            }

    def dispose(self) -> None:
        self.engine.dispose()


def get_database_manager(database_url: Optional[str] = None, echo: bool = False) -> DatabaseManager:
    """Factory for DatabaseManager, defaulting to the configured URL."""
    if database_url is None:
        from ...setting import get_settings
        settings = get_settings()
        database_url = settings.database.url
        echo = settings.database.echo
    return DatabaseManager(database_url, echo=echo)


def wait_for_db(db_manager: DatabaseManager, max_attempts: int = 5, delay_seconds: float = 2.0) -> bool:
    """Poll the database until it answers or attempts run out.

    Returns:
        True once a connection succeeds, False after max_attempts failures.
    """
    for attempt in range(1, max_attempts + 1):
        try:
            with db_manager.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info(f"Database reachable (attempt {attempt}/{max_attempts})")
            return True
        except Exception as e:
            logger.warning(f"Database not ready (attempt {attempt}/{max_attempts}): {e}")
            if attempt < max_attempts:
                time.sleep(delay_seconds)
    logger.error("Database did not become available")
    return False
