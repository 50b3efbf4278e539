"""Entry point: configure logging, build the repository, serve the API."""

import asyncio
import structlog
from config.settings import settings
from config.logging_config import setup_logging
from config.constants import BACKEND_POSTGRES
from services.profiles import create_repository
from storage.database import get_pool, close_pool, run_migrations
from web.app import start_web

log = structlog.get_logger(__name__)


async def start_service() -> None:
    """Initialize the configured backend and run the web server."""
    setup_logging()
    log.info("starting_profile_service", backend=settings.profile_backend)

    pool = None
    if settings.profile_backend == BACKEND_POSTGRES:
        pool = await get_pool()
        await run_migrations(pool)

    repository = create_repository(
        settings.profile_backend,
        pool=pool,
        fixed_profile=settings.fixed_profile,
    )

    try:
        await start_web(repository)
    finally:
        log.info("shutting_down")
        await close_pool()


def main() -> None:
    """Run the service."""
    asyncio.run(start_service())


if __name__ == "__main__":
    main()
