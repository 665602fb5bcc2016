"""
Genre repository.

Plain parameterized CRUD over the ``genre`` table. Missing rows are reported
as None / False; constraint failures surface as StoreError from db.postgres.
"""

from typing import Optional

from db.postgres import execute_read, execute_read_one, execute_write
from implementation.classes.schemas import Genre

_COLUMNS = ["id", "name"]


async def list_genres() -> list[Genre]:
    rows = await execute_read("SELECT id, name FROM genre ORDER BY id")
    return [Genre(**dict(zip(_COLUMNS, row))) for row in rows]


async def find_genre(genre_id: int) -> Optional[Genre]:
    row = await execute_read_one("SELECT id, name FROM genre WHERE id = %s", (genre_id,))
    return Genre(**dict(zip(_COLUMNS, row))) if row else None


async def create_genre(name: str) -> int:
    """Insert a genre and return its new id. Duplicate names raise DUPLICATE_KEY."""
    row = await execute_write(
        "INSERT INTO genre (name) VALUES (%s) RETURNING id",
        (name,),
        fetch_one=True,
    )
    return row[0]


async def update_genre(genre_id: int, name: str) -> bool:
    """Rename a genre. Returns whether the id was actually found."""
    count = await execute_write("UPDATE genre SET name = %s WHERE id = %s", (name, genre_id))
    return count > 0


async def delete_genre(genre_id: int) -> bool:
    """Delete a genre. Genres still referenced by movies raise REFERENTIAL_VIOLATION."""
    count = await execute_write("DELETE FROM genre WHERE id = %s", (genre_id,))
    return count > 0
