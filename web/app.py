"""Quart app factory for the profile HTTP API."""

import structlog
from quart import Quart
from config.settings import settings
from storage.repositories.profile_repo import ProfileRepository

log = structlog.get_logger(__name__)


def create_app(repository: ProfileRepository) -> Quart:
    """Create the Quart application around an already-built repository."""
    app = Quart(__name__)

    # Routes read the repository from here and pass it on explicitly
    app.profile_repository = repository  # type: ignore[attr-defined]

    from web.routes.profiles import profiles_bp

    app.register_blueprint(profiles_bp, url_prefix="/profiles")

    @app.route("/health")
    async def health():
        return {"status": "ok"}, 200

    return app


async def start_web(repository: ProfileRepository) -> None:
    """Serve the API until cancelled."""
    app = create_app(repository)
    log.info("starting_web", host=settings.web_host, port=settings.web_port)
    await app.run_task(host=settings.web_host, port=settings.web_port)
