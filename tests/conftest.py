import pytest
from fastapi.testclient import TestClient

from helium.core.config import Settings
from helium.core.logging_config import LogService
from helium.models.movie import Movie
from helium.server import create_app
from helium.services.movie_service import MovieNotFoundError

MOVIE_DOCS = [
    {
        "_id": "tt0120737",
        "title": "The Lord of the Rings: The Fellowship of the Ring",
        "year": 2001,
        "runtime": 178,
        "rating": 8.8,
        "votes": 1640000,
        "genres": ["Action", "Adventure", "Drama"],
        "roles": [
            {"actorId": "nm0000704", "name": "Elijah Wood", "order": 1, "category": "actor", "characters": ["Frodo"]},
            {"actorId": "nm0005212", "name": "Ian McKellen", "order": 2, "category": "actor", "characters": ["Gandalf"]},
        ],
    },
    {
        "_id": "nm0000704",
        "title": "Elijah Wood: A Retrospective",
        "year": 2019,
        "rating": 6.1,
        "genres": ["Documentary"],
        "roles": [{"actorId": "nm0000704", "name": "Elijah Wood"}],
    },
]


class FakeMovieService:
    """In-memory stand-in for MovieService."""

    def __init__(self, docs=None, error=None):
        self.movies = {doc["_id"]: Movie.model_validate(doc) for doc in (docs if docs is not None else MOVIE_DOCS)}
        self.error = error
        self.queries = []
        self.requested_ids = []

    async def query_movies(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return sorted(self.movies.values(), key=lambda m: m.title)

    async def get_movie(self, movie_id):
        self.requested_ids.append(movie_id)
        if self.error:
            raise self.error
        if movie_id not in self.movies:
            raise MovieNotFoundError(movie_id)
        return self.movies[movie_id]


class RecordingLogService(LogService):
    def __init__(self):
        super().__init__()
        self.entries = []

    def trace(self, message, correlation_id=None):
        self.entries.append((message, correlation_id))
        super().trace(message, correlation_id)


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def movie_service():
    return FakeMovieService()


@pytest.fixture
def log_service():
    return RecordingLogService()


@pytest.fixture
def app(settings, movie_service, log_service):
    return create_app(settings=settings, movie_service=movie_service, log_service=log_service)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_client(settings, log_service):
    """Builds a client around a FakeMovieService configured by the test."""
    def _make(docs=None, error=None):
        service = FakeMovieService(docs=docs, error=error)
        return TestClient(create_app(settings=settings, movie_service=service, log_service=log_service))
    return _make
