"""
Genre affinity for actors.

Counts an actor's cast appearances per genre and picks the favorite one.
Read-only; a pure function of the stored rows at call time.
"""

from typing import Optional

from db.postgres import execute_read
from implementation.classes.schemas import GenreFrequency

_GENRE_FREQUENCY_QUERY = """
    SELECT genre.name AS genre, count(genre.name) AS frequency
    FROM actor
    JOIN movie_actor ON actor.id = movie_actor.actor_id
    JOIN movie ON movie.id = movie_actor.movie_id
    JOIN genre ON genre.id = movie.genre_id
    WHERE actor.id = %s
    GROUP BY genre.name
    ORDER BY frequency DESC, genre.name ASC
"""


async def list_genre_frequency(actor_id: int) -> list[GenreFrequency]:
    """Return how many of the actor's movies fall into each genre."""
    rows = await execute_read(_GENRE_FREQUENCY_QUERY, (actor_id,))
    return [GenreFrequency(genre=genre, frequency=int(frequency)) for genre, frequency in rows]


def pick_favorite_genre(frequencies: list[GenreFrequency]) -> Optional[str]:
    """
    Select the most frequent genre, breaking ties alphabetically by name.

    The choice does not depend on the order of ``frequencies``.
    """
    if not frequencies:
        return None
    best = min(frequencies, key=lambda item: (-item.frequency, item.genre))
    return best.genre


async def find_favorite_genre(actor_id: int) -> Optional[str]:
    """
    Return the genre the actor has appeared in most often.

    Returns:
        The genre name, or None when the actor has no cast appearances.
    """
    return pick_favorite_genre(await list_genre_frequency(actor_id))
