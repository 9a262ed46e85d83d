# FastAPI dependencies and connection lifecycle
# helium/api/deps.py

import logging
from typing import Optional

from fastapi import HTTPException, Request, status
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

from helium.core.config import Settings
from helium.core.logging_config import LogService
from helium.services.movie_service import MovieService

logger = logging.getLogger(__name__)


async def initialize_connections(settings: Settings) -> Optional[AsyncIOMotorClient]:
    """
    Creates the MongoDB client and verifies the server is reachable.
    Call this during FastAPI startup using lifespan events.

    Returns the client, or None when the database could not be reached; requests
    that need the database then fail with 503 instead of the app refusing to start.
    """
    logger.info("Initializing MongoDB connection...")
    client = AsyncIOMotorClient(
        settings.MONGODB_URI.get_secret_value(),
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    )
    try:
        await client.admin.command("ping")
    except ConnectionFailure as e:
        logger.error(f"MongoDB connection failed during initialization: {e}", exc_info=True)
        client.close()
        return None
    except PyMongoError as e:
        logger.error(f"Unexpected MongoDB error during initialization: {e}", exc_info=True)
        client.close()
        return None

    logger.info(f"MongoDB client initialized successfully. Using database: '{settings.MONGODB_DB_NAME}'")
    return client


def close_connections(client: Optional[AsyncIOMotorClient]) -> None:
    """Closes the MongoDB client. Call this during FastAPI shutdown."""
    if client is not None:
        client.close()
        logger.info("MongoDB client closed.")


# --- Database Dependency ---

def get_db(request: Request) -> AsyncIOMotorDatabase:
    """
    FastAPI dependency returning the application's MongoDB database.

    Raises:
        HTTPException 503: If the database client is not available.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        logger.critical("MongoDB database instance is not available. Check initialization.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database service not available.",
        )
    return db


# --- Service Dependencies ---

def get_movie_service(request: Request) -> MovieService:
    """
    FastAPI dependency providing the MovieService.

    Uses the service composed into the app when one was given, otherwise builds one
    over the live database.
    """
    service = getattr(request.app.state, "movie_service", None)
    if service is not None:
        return service
    settings: Settings = request.app.state.settings
    return MovieService(db=get_db(request), collection_name=settings.MONGODB_MOVIES_COLLECTION)


def get_log_service(request: Request) -> LogService:
    return request.app.state.log_service


def get_correlation_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)
