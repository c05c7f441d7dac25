"""FastAPI application entry point for the ECO memorizer service."""

import logging
import logging.handlers
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from .config import Settings, get_settings
from .api.routes.api import router as api_router
from .api.routes.openings import router as openings_router
from .services.eco_fetcher import EcoTableFetcher
from .services.move_index_cache import MoveIndexCache
from .services.resolver import MoveResolver

LOG_DIR = Path(__file__).parent.parent / "logs"


def setup_logging(log_level: str = "INFO"):
    """Configure application logging with console and file output."""
    log_level = log_level.upper()

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not any(getattr(h, "_eco_memorizer", False) for h in root_logger.handlers):
        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler._eco_memorizer = True
        root_logger.addHandler(console_handler)

        # File handler - write to logs/eco_memorizer.log for debugging
        LOG_DIR.mkdir(exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            LOG_DIR / "eco_memorizer.log",
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
        )
        file_handler.setFormatter(formatter)
        file_handler._eco_memorizer = True
        root_logger.addHandler(file_handler)

    # Set levels for our modules
    logging.getLogger("eco_memorizer").setLevel(log_level)

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    logger = setup_logging(app.state.settings.log_level)
    logger.info(
        f"Starting Chess ECO Table Memorizer (source={app.state.fetcher.url}, "
        f"ttl={app.state.settings.cache_ttl_seconds}s)"
    )
    yield
    logger.info("Shutting down Chess ECO Table Memorizer...")


def create_app(
    settings: Optional[Settings] = None,
    fetcher: Optional[EcoTableFetcher] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Defaults to the environment settings.
        fetcher: Upstream document fetcher. Defaults to one built from settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Chess ECO Table Memorizer",
        description="ECO opening names, canonical moves and next-move lookups",
        version="0.1.0",
        lifespan=lifespan,
    )

    fetcher = fetcher or EcoTableFetcher(
        url=settings.eco_table_url,
        timeout_seconds=settings.fetch_timeout_seconds,
    )
    move_cache = MoveIndexCache(fetch=fetcher.fetch, ttl_seconds=settings.cache_ttl_seconds)

    app.state.settings = settings
    app.state.fetcher = fetcher
    app.state.move_cache = move_cache
    app.state.resolver = MoveResolver(move_cache)

    # Include routers; the catch-all code lookup goes last
    app.include_router(api_router)
    app.include_router(openings_router)

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Run the server with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
