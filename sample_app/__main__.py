"""
sample-app - Main Entry Point

Runs the API under uvicorn:

    python -m sample_app
    sample-app
"""

import structlog
import uvicorn

from sample_app.config import get_settings

logger = structlog.get_logger(__name__)

APP_IMPORT_PATH = "sample_app.api.main:app"


def main() -> None:
    """Main entry point for running the application."""
    # Importing the app configures logging for the whole process
    from sample_app.api.main import app  # noqa: F401

    settings = get_settings()

    logger.info(
        "starting_server",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )

    # log_config=None leaves uvicorn's loggers on the root handlers installed
    # by configure_logging; the request middleware replaces the access log.
    uvicorn.run(
        APP_IMPORT_PATH,
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_config=None,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
