from fastapi import FastAPI

from filestore.config import Settings, get_settings
from filestore.handlers import install_error_handlers
from filestore.logging import configure_logging, get_logger
from filestore.middleware import RequestIDMiddleware
from filestore.schemas.response import Response

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Settings are fixed here for the lifetime of the app and exposed to the
    error handlers through app.state.settings.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="filestore", version=settings.version)
    app.state.settings = settings
    app.add_middleware(RequestIDMiddleware)
    install_error_handlers(app)

    @app.get("/ping")
    async def ping() -> dict[str, object]:
        """Liveness probe; replies with the running version."""
        return Response.ok(settings.version).model_dump()

    logger.info("app_created", mode=settings.app_mode, version=settings.version)
    return app


app = create_app()
