# helium/api/endpoints/movies.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status
from fastapi.responses import PlainTextResponse

from helium.api.deps import get_correlation_id, get_log_service, get_movie_service
from helium.core.logging_config import LogService
from helium.models.movie import Movie
from helium.models.query import MovieQuery
from helium.services.movie_service import MovieNotFoundError, MovieService
from helium.utils.validation import DEFAULT_PAGE_SIZE, validate_movie_id, validate_movies

logger = logging.getLogger(__name__)
router = APIRouter()


def _bad_request(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)


@router.get(
    "",  # GET /api/movies
    response_model=List[Movie],
    summary="List Movies",
    description="Retrieve a page of movies, optionally filtered by title, genre, year, rating or actor.",
    responses={
        400: {"description": "Invalid query parameter", "content": {"text/plain": {}}},
    },
)
async def get_all_movies(
    request: Request,
    # Documented here; checked against the raw query string below.
    q: Optional[str] = Query(None, description="The term used to search by movie title (rings)"),
    genre: Optional[str] = Query(None, description="Movies of a genre (Action)"),
    year: Optional[str] = Query(None, description="Get movies by year (2005)"),
    rating: Optional[str] = Query(None, description="Get movies with a rating >= rating (8.5)"),
    actorid: Optional[str] = Query(None, description="Get movies by Actor Id (nm0000704)"),
    pageNumber: Optional[str] = Query(None, description="1 based page index (default 1)"),
    pageSize: Optional[str] = Query(None, description=f"page size (1000 max, default {DEFAULT_PAGE_SIZE})"),
    movie_service: MovieService = Depends(get_movie_service),
    log: LogService = Depends(get_log_service),
    correlation_id: Optional[str] = Depends(get_correlation_id),
):
    params = request.query_params
    validated, message = validate_movies(params)
    if not validated:
        log.trace(f"InvalidParameter|getAllMovies|{message}", correlation_id)
        return _bad_request(message)

    query = MovieQuery.from_params(params)
    try:
        return await movie_service.query_movies(query)
    except Exception as e:
        logger.error(f"Error listing movies: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while retrieving movies."
        )


@router.get(
    "/{movie_id}",  # GET /api/movies/{movie_id}
    response_model=Movie,
    summary="Get Movie Details",
    description="Retrieve and return a single movie by movie ID.",
    responses={
        400: {"description": "Invalid movie ID", "content": {"text/plain": {}}},
        404: {"description": "A movie with the specified ID was not found."},
    },
)
async def get_movie_by_id(
    movie_id: str = Path(..., description="The ID of the movie to look for."),
    movie_service: MovieService = Depends(get_movie_service),
    log: LogService = Depends(get_log_service),
    correlation_id: Optional[str] = Depends(get_correlation_id),
):
    validated, message = validate_movie_id(movie_id)
    if not validated:
        log.trace(f"getMovieById|{movie_id}|{message}", correlation_id)
        return _bad_request(message)

    try:
        return await movie_service.get_movie(movie_id)
    except MovieNotFoundError:
        logger.warning(f"Movie not found attempt: ID {movie_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Movie with ID '{movie_id}' not found."
        )
    except Exception as e:
        logger.error(f"Error getting movie {movie_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while retrieving the movie details."
        )
