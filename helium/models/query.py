# helium/models/query.py

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from helium.utils.helpers import calculate_skip
from helium.utils.validation import DEFAULT_PAGE_SIZE, MAX_PAGE_NUMBER, MAX_PAGE_SIZE


class MovieQuery(BaseModel):
    """
    Validated filters and pagination for a movie list request.

    Field aliases match the query string names (``actorid``, ``pageNumber``,
    ``pageSize``) so a validated request's parameters can be loaded directly.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True, str_strip_whitespace=True)

    q: Optional[str] = Field(None, description="Term searched for in the movie title.")
    genre: Optional[str] = Field(None, description="Movies of a genre (Action).")
    year: Optional[int] = Field(None, description="Movies released in a year (2005).")
    rating: Optional[float] = Field(None, ge=0, le=10, description="Movies with a rating >= rating (8.5).")
    actor_id: Optional[str] = Field(None, alias="actorid", description="Movies an actor appears in (nm0000704).")
    page_number: int = Field(1, alias="pageNumber", ge=1, le=MAX_PAGE_NUMBER, description="1 based page index.")
    page_size: int = Field(DEFAULT_PAGE_SIZE, alias="pageSize", ge=1, le=MAX_PAGE_SIZE, description="Page size.")

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "MovieQuery":
        """Builds a query from raw query parameters already checked by validate_movies."""
        fields = ("q", "genre", "year", "rating", "actorid", "pageNumber", "pageSize")
        return cls.model_validate({k: params[k] for k in fields if k in params})

    @property
    def skip(self) -> int:
        return calculate_skip(self.page_number, self.page_size)
