"""
Pydantic schemas for catalog entities and API payloads.

Payload models validate incoming request bodies (unknown keys are rejected).
Entity models describe rows returned by the repositories in db/.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, conint, conlist, constr
from .enums import CastLinkStatus


PositiveId = conint(ge=1)

# Upper bound on actors accepted by one cast-linking request.
MAX_CAST_BATCH = 100


# -----------------------------
#            GENRES
# -----------------------------

class GenrePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=50) = Field(
        ...,
        description="Unique genre name, e.g. 'Horror'."
    )


class Genre(BaseModel):
    id: int
    name: str


# -----------------------------
#            MOVIES
# -----------------------------

class MoviePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=200) = Field(
        ...,
        description="Unique movie title."
    )
    synopsis: Optional[constr(strip_whitespace=True, min_length=1)] = None
    released_at: date
    runtime: conint(ge=1) = Field(..., description="Runtime in minutes.")
    genre_id: PositiveId


class Movie(BaseModel):
    id: int
    name: str
    synopsis: Optional[str] = None
    released_at: date
    runtime: int
    genre_id: int


# -----------------------------
#            ACTORS
# -----------------------------

class ActorPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=200) = Field(
        ...,
        description="Unique actor name."
    )
    born_at: date
    bio: Optional[constr(strip_whitespace=True, min_length=1)] = None


class Actor(BaseModel):
    id: int
    name: str
    bio: Optional[str] = None
    born_at: date


# -----------------------------
#             CAST
# -----------------------------

class CastPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    actor_ids: conlist(PositiveId, max_length=MAX_CAST_BATCH) = Field(
        ...,
        description="Actors to add to the movie cast. Actors already in the cast are left untouched."
    )


class CharacterPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    movie_id: PositiveId
    character_name: constr(strip_whitespace=True, min_length=1, max_length=200)


class CastMember(BaseModel):
    actor_id: int
    name: str
    character_name: str = ""


class ActorCharacter(BaseModel):
    movie_id: int
    movie_name: str
    character_name: str = ""


class CastLinkResult(BaseModel):
    actor_id: int
    status: CastLinkStatus
    detail: Optional[str] = None


# -----------------------------
#        GENRE AFFINITY
# -----------------------------

class GenreFrequency(BaseModel):
    genre: str
    frequency: int


class FavoriteGenre(BaseModel):
    actor_id: int
    genre: Optional[str] = None


# -----------------------------
#           RESPONSES
# -----------------------------

class CreatedResponse(BaseModel):
    id: int
    path: str
