import argparse
import logging
import sys

from .core.analysis import AIClient
from .core.db import get_database_manager, seed_sample_projects, wait_for_db


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.ERROR)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("backoff").setLevel(logging.ERROR)


logger = logging.getLogger(__name__)


def main():
    """Main entry point for ProjectDesk."""
    from .setting import get_settings
    settings = get_settings()

    # Parse arguments
    parser = argparse.ArgumentParser(description="ProjectDesk - Project Management API")
    parser.add_argument(
        "--host",
        type=str,
        default=settings.server.host,
        help="Interface to bind the API server to"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.server.port,
        help="Port for the API server"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.server.log_level.upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show error details in 500 responses"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Replace all projects with the sample data set before starting"
    )
    args = parser.parse_args()

    # Setup logging
    setup_logging(args.log_level)
    logger.info(f"Starting ProjectDesk - Host: {args.host}")

    if args.debug:
        settings.server.debug = True

    # Initialize database
    db_manager = get_database_manager(settings.database.url, settings.database.echo)
    if not wait_for_db(db_manager):
        logger.error("Database unavailable; exiting")
        sys.exit(1)
    db_manager.init_db()

    if args.seed:
        seed_sample_projects(db_manager)

    ai_client = AIClient(settings.ai)

    # Build FastAPI app
    from .api.app import create_app
    app = create_app(settings=settings, db_manager=db_manager, ai_client=ai_client)

    # Launch with uvicorn
    import uvicorn

    logger.info(f"Starting FastAPI server on http://{args.host}:{args.port}")
    print(f"\n  ProjectDesk is running at: http://localhost:{args.port}")
    print(f"  API docs at: http://localhost:{args.port}/docs\n")

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
