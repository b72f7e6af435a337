import logging
from typing import Optional

from fastapi import FastAPI

from . import __version__
from .middleware import AuthLoggingMiddleware
from .responses import register_exception_handlers
from .router import router
from .settings import Settings, settings


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the service.
    
    The API key and other options come from ``app_settings`` (defaults to the
    environment-loaded global settings), so tests can inject their own.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="User Service",
        version=__version__,
        debug=app_settings.debug,
        redirect_slashes=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    register_exception_handlers(app)
    app.include_router(router)
    app.add_middleware(AuthLoggingMiddleware, api_key=app_settings.api_key)
    return app


app = create_app()


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def cli():
    import uvicorn
    configure_logging(settings.log_level)
    logger.info(f"listening on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    cli()
