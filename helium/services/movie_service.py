# helium/services/movie_service.py

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from helium.models.movie import Movie
from helium.models.query import MovieQuery
from helium.utils.helpers import literal_pattern

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "movies"


class MovieNotFoundError(Exception):
    """Raised when no movie document exists for the requested ID."""

    def __init__(self, movie_id: str):
        super().__init__(f"Movie with ID '{movie_id}' not found.")
        self.movie_id = movie_id


def build_movie_filter(query: MovieQuery) -> Dict[str, Any]:
    """
    Translates a validated MovieQuery into a MongoDB filter document.

    - q: case-insensitive substring of the title
    - genre: case-insensitive exact match against an element of genres
    - year: exact release year
    - rating: rating >= value
    - actor_id: one of the roles is played by the actor
    """
    mongo_filter: Dict[str, Any] = {}
    title_pattern = literal_pattern(query.q)
    if title_pattern:
        mongo_filter["title"] = {"$regex": title_pattern, "$options": "i"}
    genre_pattern = literal_pattern(query.genre, exact=True)
    if genre_pattern:
        mongo_filter["genres"] = {"$regex": genre_pattern, "$options": "i"}
    if query.year is not None:
        mongo_filter["year"] = query.year
    if query.rating is not None:
        mongo_filter["rating"] = {"$gte": query.rating}
    if query.actor_id:
        mongo_filter["roles.actorId"] = query.actor_id
    return mongo_filter


class MovieService:
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = DEFAULT_COLLECTION):
        """
        Initializes the Movie Service.

        Args:
            db: An instance of AsyncIOMotorDatabase (Motor client).
            collection_name: Name of the collection holding movie documents.
        """
        self.db = db
        self.collection = db[collection_name]

    async def query_movies(self, query: MovieQuery) -> List[Movie]:
        """
        Retrieves one page of movies matching the query, ordered by title.

        Args:
            query: Validated filters and pagination.

        Returns:
            A list of Movie objects; empty when nothing matches.

        Raises:
            PyMongoError: If a database error occurs.
        """
        mongo_filter = build_movie_filter(query)
        try:
            cursor = (
                self.collection.find(mongo_filter)
                .sort([("title", ASCENDING), ("_id", ASCENDING)])
                .skip(query.skip)
                .limit(query.page_size)
            )
            docs = await cursor.to_list(length=query.page_size)
        except PyMongoError as e:
            logger.error(f"Database error while fetching movies with filter {mongo_filter}: {e}", exc_info=True)
            raise

        movies = [Movie.model_validate(doc) for doc in docs]
        logger.debug(f"Fetched {len(movies)} movies (page {query.page_number}, size {query.page_size}) with filter: {mongo_filter}")
        return movies

    async def get_movie(self, movie_id: str) -> Movie:
        """
        Retrieves a single movie by its ID.

        Args:
            movie_id: The movie ID stored as the document _id.

        Returns:
            A Movie object.

        Raises:
            MovieNotFoundError: If no movie with the given ID exists.
            PyMongoError: If a database error occurs.
        """
        try:
            doc = await self.collection.find_one({"_id": movie_id})
        except PyMongoError as e:
            logger.error(f"Database error while fetching movie {movie_id}: {e}", exc_info=True)
            raise

        if doc is None:
            logger.debug(f"Movie with ID {movie_id} not found in database.")
            raise MovieNotFoundError(movie_id)
        return Movie.model_validate(doc)
