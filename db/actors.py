"""
Actor repository.

CRUD over the ``actor`` table plus read views over an actor's filmography:
the movies they appear in and the characters they played.
"""

from datetime import date
from typing import Optional

from db.postgres import execute_read, execute_read_one, execute_write
from implementation.classes.schemas import Actor, ActorCharacter, Movie

_ACTOR_COLUMNS = ["id", "name", "bio", "born_at"]
_MOVIE_COLUMNS = ["id", "name", "synopsis", "released_at", "runtime", "genre_id"]


async def list_actors() -> list[Actor]:
    rows = await execute_read("SELECT id, name, bio, born_at FROM actor ORDER BY id")
    return [Actor(**dict(zip(_ACTOR_COLUMNS, row))) for row in rows]


async def find_actor(actor_id: int) -> Optional[Actor]:
    row = await execute_read_one(
        "SELECT id, name, bio, born_at FROM actor WHERE id = %s",
        (actor_id,),
    )
    return Actor(**dict(zip(_ACTOR_COLUMNS, row))) if row else None


async def create_actor(name: str, born_at: date, bio: Optional[str] = None) -> int:
    """Insert an actor and return its id. Duplicate names raise DUPLICATE_KEY."""
    row = await execute_write(
        "INSERT INTO actor (name, bio, born_at) VALUES (%s, %s, %s) RETURNING id",
        (name, bio, born_at),
        fetch_one=True,
    )
    return row[0]


async def update_actor(actor_id: int, name: str, born_at: date, bio: Optional[str] = None) -> bool:
    count = await execute_write(
        "UPDATE actor SET name = %s, bio = %s, born_at = %s WHERE id = %s",
        (name, bio, born_at, actor_id),
    )
    return count > 0


async def delete_actor(actor_id: int) -> bool:
    """Delete an actor. Actors still in a cast raise REFERENTIAL_VIOLATION."""
    count = await execute_write("DELETE FROM actor WHERE id = %s", (actor_id,))
    return count > 0


async def list_actor_movies(actor_id: int) -> list[Movie]:
    """Return the movies in which the actor appears."""
    query = """
        SELECT movie.id, movie.name, movie.synopsis, movie.released_at,
               movie.runtime, movie.genre_id
        FROM actor
        JOIN movie_actor ON actor.id = movie_actor.actor_id
        JOIN movie ON movie.id = movie_actor.movie_id
        WHERE actor.id = %s
        ORDER BY movie.released_at, movie.id
    """
    rows = await execute_read(query, (actor_id,))
    return [Movie(**dict(zip(_MOVIE_COLUMNS, row))) for row in rows]


async def list_actor_characters(actor_id: int) -> list[ActorCharacter]:
    """Return every (movie, character) pair recorded for the actor."""
    query = """
        SELECT movie.id, movie.name, movie_actor.character_name
        FROM movie_actor
        JOIN movie ON movie.id = movie_actor.movie_id
        WHERE movie_actor.actor_id = %s
        ORDER BY movie.released_at, movie.id
    """
    rows = await execute_read(query, (actor_id,))
    return [
        ActorCharacter(movie_id=movie_id, movie_name=movie_name, character_name=character_name or "")
        for movie_id, movie_name, character_name in rows
    ]
