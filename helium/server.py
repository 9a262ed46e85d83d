"""
Primary FastAPI application entry point
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware

from helium.api.api import api_router
from helium.api.deps import close_connections, initialize_connections
from helium.core.config import Settings, get_settings
from helium.core.logging_config import LogService, configure_logging
from helium.middleware.endpoint_logger import endpoint_logger
from helium.middleware.request_id import request_id_middleware
from helium.services.movie_service import MovieService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if app.state.movie_service is None:
        logger.info("Application startup: Initializing connections...")
        settings: Settings = app.state.settings
        app.state.mongo_client = await initialize_connections(settings)
        if app.state.mongo_client is not None:
            app.state.db = app.state.mongo_client[settings.MONGODB_DB_NAME]
    yield
    # Shutdown
    if app.state.mongo_client is not None:
        logger.info("Application shutdown: Closing connections...")
        close_connections(app.state.mongo_client)
        app.state.mongo_client = None
        app.state.db = None


def create_app(
    settings: Optional[Settings] = None,
    movie_service: Optional[MovieService] = None,
    log_service: Optional[LogService] = None,
) -> FastAPI:
    """
    Builds the application with its collaborators.

    Args:
        settings: Configuration; loaded from the environment when omitted.
        movie_service: Data access to use instead of connecting to MongoDB on startup.
        log_service: Trace logger shared by the controllers and the endpoint logger.

    Returns:
        The configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    log_service = log_service or LogService()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=f"{settings.API_PREFIX}/redoc",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.log_service = log_service
    app.state.movie_service = movie_service
    app.state.mongo_client = None
    app.state.db = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    # Registered innermost first: the request id is assigned before the endpoint logger runs
    app.middleware("http")(endpoint_logger(log_service))
    app.middleware("http")(request_id_middleware)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def root():
        """Root endpoint to confirm the API is running."""
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    return app


app = create_app()

# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("helium.server:app", host="0.0.0.0", port=get_settings().PORT, reload=True)
