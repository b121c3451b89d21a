import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from gitly.config import configuration
from gitly.middleware import RequestLoggingMiddleware
from gitly.routers import health_router, web_router
from gitly.utils.error_handlers import register_error_handlers

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)


# =============================================================================
#   Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown around the app's lifetime."""
    logger.info(
        "%s %s starting (debug=%s).",
        configuration.app.name, configuration.app.version, app.state.debug,
    )
    yield
    logger.info("Application shutdown complete.")


# =============================================================================
#   Application factory
# =============================================================================
def create_app(debug: Optional[bool] = None) -> FastAPI:
    """Build the Gitly FastAPI application.

    Args:
        debug: Include stack traces in 500 responses. Defaults to ``app.debug``
            from config.yml.

    Returns:
        Configured FastAPI instance.
    """
    if debug is None:
        debug = configuration.app.debug

    app = FastAPI(
        debug=False,
        title=configuration.app.name,
        description="URL shortening service.",
        version=configuration.app.version,
        lifespan=lifespan,
    )
    app.state.debug = debug

    app.add_middleware(RequestLoggingMiddleware)
    register_error_handlers(app, debug=debug)

    app.include_router(health_router)
    app.include_router(web_router)

    return app
