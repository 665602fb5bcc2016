"""
Movie repository.

CRUD over the ``movie`` table plus the cast listing for a single movie.
"""

from datetime import date
from typing import Optional

from db.postgres import execute_read, execute_read_one, execute_write
from implementation.classes.schemas import CastMember, Movie

_MOVIE_COLUMNS = ["id", "name", "synopsis", "released_at", "runtime", "genre_id"]
_SELECT_MOVIE = "SELECT id, name, synopsis, released_at, runtime, genre_id FROM movie"


async def list_movies() -> list[Movie]:
    rows = await execute_read(f"{_SELECT_MOVIE} ORDER BY id")
    return [Movie(**dict(zip(_MOVIE_COLUMNS, row))) for row in rows]


async def find_movie(movie_id: int) -> Optional[Movie]:
    row = await execute_read_one(f"{_SELECT_MOVIE} WHERE id = %s", (movie_id,))
    return Movie(**dict(zip(_MOVIE_COLUMNS, row))) if row else None


async def create_movie(
    name: str,
    released_at: date,
    runtime: int,
    genre_id: int,
    synopsis: Optional[str] = None,
) -> int:
    """
    Insert a movie and return the id that was created.

    Raises:
        StoreError: DUPLICATE_KEY when the name is taken, REFERENTIAL_VIOLATION
            when genre_id does not exist.
    """
    query = """
    INSERT INTO movie (name, synopsis, released_at, runtime, genre_id)
    VALUES (%s, %s, %s, %s, %s)
    RETURNING id;
    """
    row = await execute_write(
        query,
        (name, synopsis, released_at, runtime, genre_id),
        fetch_one=True,
    )
    return row[0]


async def update_movie(
    movie_id: int,
    name: str,
    released_at: date,
    runtime: int,
    genre_id: int,
    synopsis: Optional[str] = None,
) -> bool:
    """Overwrite a movie row. Returns whether the id was actually found."""
    query = """
    UPDATE movie
    SET name = %s, synopsis = %s, released_at = %s, runtime = %s, genre_id = %s
    WHERE id = %s;
    """
    count = await execute_write(query, (name, synopsis, released_at, runtime, genre_id, movie_id))
    return count > 0


async def delete_movie(movie_id: int) -> bool:
    """Delete a movie. Movies with cast rows raise REFERENTIAL_VIOLATION."""
    count = await execute_write("DELETE FROM movie WHERE id = %s", (movie_id,))
    return count > 0


async def list_movie_cast(movie_id: int) -> list[CastMember]:
    """Return the actors in a movie's cast with the character each one plays."""
    query = """
        SELECT actor.id, actor.name, movie_actor.character_name
        FROM movie_actor
        JOIN actor ON actor.id = movie_actor.actor_id
        WHERE movie_actor.movie_id = %s
        ORDER BY actor.name
    """
    rows = await execute_read(query, (movie_id,))
    return [
        CastMember(actor_id=actor_id, name=name, character_name=character_name or "")
        for actor_id, name, character_name in rows
    ]
