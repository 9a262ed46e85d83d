# helium/models/movie.py

from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Role(BaseModel):
    """An actor's credit on a movie."""
    actorId: str = Field(..., description="Actor ID (e.g. nm0000704).")
    name: Optional[str] = Field(None, description="Actor's display name.")
    order: Optional[int] = Field(None, description="Billing order, 1 based.")
    category: Optional[str] = Field(None, description="Credit category (actor, actress, ...).")
    characters: List[str] = Field(default_factory=list, description="Characters played.")


class Movie(BaseModel):
    """
    A movie document as read from the database.

    The store keeps the movie ID in ``_id``; it is exposed as ``id``.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., validation_alias=AliasChoices("_id", "id"), description="Movie ID (e.g. tt0120737).")
    title: str = Field(..., description="Movie title.")
    year: Optional[int] = Field(None, description="Year of release.")
    runtime: Optional[int] = Field(None, description="Runtime in minutes.")
    rating: Optional[float] = Field(None, description="Average user rating, 0 to 10.")
    votes: Optional[int] = Field(None, description="Number of user votes behind the rating.")
    genres: List[str] = Field(default_factory=list, description="Genres associated with the movie.")
    roles: List[Role] = Field(default_factory=list, description="Cast of the movie.")

    @property
    def actor_ids(self) -> List[str]:
        return [role.actorId for role in self.roles]
