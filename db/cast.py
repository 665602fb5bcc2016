"""
Cast relationship linking.

Attaches actors to a movie's cast without ever duplicating a (movie, actor)
pair. The check phase runs sequentially over the de-duplicated input; the
insert phase fans out concurrently, one INSERT per staged actor.

Partial failures are best-effort: an actor that cannot be linked (e.g. the id
does not exist) is reported as FAILED in the returned results while every
other staged actor is still linked. Transport failures are propagated once all
inserts have settled.
"""

import asyncio
import logging
from typing import Sequence

from db.postgres import execute_read_one, execute_write
from implementation.classes.enums import CastLinkStatus, StoreErrorKind
from implementation.classes.errors import StoreError
from implementation.classes.schemas import CastLinkResult

logger = logging.getLogger(__name__)

_INSERT_CONCURRENCY_LIMIT = 5    # max in-flight inserts per call; stays below the pool max_size (10)

_COUNT_CAST_QUERY = """
    SELECT count(*)
    FROM movie_actor
    WHERE movie_id = %s AND actor_id = %s
"""

_INSERT_CAST_QUERY = """
    INSERT INTO movie_actor (movie_id, actor_id)
    VALUES (%s, %s)
"""

_INSERT_CHARACTER_QUERY = """
    INSERT INTO movie_actor (movie_id, actor_id, character_name)
    VALUES (%s, %s, %s)
"""


async def is_in_cast(movie_id: int, actor_id: int) -> bool:
    """Return whether a cast relation already exists for the pair."""
    row = await execute_read_one(_COUNT_CAST_QUERY, (movie_id, actor_id))
    return bool(row and row[0] > 0)


async def _insert_cast_member(
    sem: asyncio.Semaphore,
    movie_id: int,
    actor_id: int,
) -> CastLinkResult:
    """
    Insert one cast relation and classify the outcome.

    A unique violation means another caller linked the pair between our check
    and our insert, so it counts as already linked. Referential violations are
    reported per actor. Anything else propagates.
    """
    try:
        async with sem:
            await execute_write(_INSERT_CAST_QUERY, (movie_id, actor_id))
    except StoreError as exc:
        if exc.kind is StoreErrorKind.DUPLICATE_KEY:
            return CastLinkResult(actor_id=actor_id, status=CastLinkStatus.ALREADY_LINKED)
        if exc.kind is StoreErrorKind.REFERENTIAL_VIOLATION:
            logger.warning("Could not link actor %d to movie %d: %s", actor_id, movie_id, exc.message)
            return CastLinkResult(
                actor_id=actor_id,
                status=CastLinkStatus.FAILED,
                detail="movie or actor does not exist",
            )
        raise
    return CastLinkResult(actor_id=actor_id, status=CastLinkStatus.LINKED)


async def link_actors_to_movie(movie_id: int, actor_ids: Sequence[int]) -> list[CastLinkResult]:
    """
    Ensure every given actor is in the movie's cast exactly once.

    Steps:
        1. De-duplicate actor_ids, keeping first-seen order.
        2. Sequentially check which actors are already in the cast.
        3. Insert the remaining actors concurrently, at most
           _INSERT_CONCURRENCY_LIMIT at a time.

    Calling this twice with the same arguments leaves the same set of
    relations as calling it once.

    Args:
        movie_id: Movie whose cast is extended.
        actor_ids: Candidate actors, in any order, possibly repeated.

    Returns:
        One CastLinkResult per unique actor id, in input order.

    Raises:
        StoreError: TRANSPORT failures from the check or insert phase.
    """
    unique_actor_ids = list(dict.fromkeys(actor_ids))
    if not unique_actor_ids:
        return []

    results: dict[int, CastLinkResult] = {}
    staged: list[int] = []
    for actor_id in unique_actor_ids:
        if await is_in_cast(movie_id, actor_id):
            results[actor_id] = CastLinkResult(actor_id=actor_id, status=CastLinkStatus.ALREADY_LINKED)
        else:
            staged.append(actor_id)

    sem = asyncio.Semaphore(_INSERT_CONCURRENCY_LIMIT)
    outcomes = await asyncio.gather(
        *(_insert_cast_member(sem, movie_id, actor_id) for actor_id in staged),
        return_exceptions=True,
    )

    errors: list[BaseException] = []
    for actor_id, outcome in zip(staged, outcomes):
        if isinstance(outcome, BaseException):
            errors.append(outcome)
        else:
            results[actor_id] = outcome
    if errors:
        raise errors[0]

    linked = sum(1 for r in results.values() if r.status is CastLinkStatus.LINKED)
    failed = sum(1 for r in results.values() if r.status is CastLinkStatus.FAILED)
    logger.info(
        "Linked %d actor(s) to movie %d (%d already in cast, %d failed)",
        linked, movie_id, len(unique_actor_ids) - linked - failed, failed,
    )
    return [results[actor_id] for actor_id in unique_actor_ids]


async def add_character(actor_id: int, movie_id: int, character_name: str) -> None:
    """
    Record that the actor plays ``character_name`` in the movie.

    Unlike link_actors_to_movie, an existing pair is an error here.

    Raises:
        StoreError: DUPLICATE_KEY when the actor is already in the cast,
            REFERENTIAL_VIOLATION when the movie or actor does not exist.
    """
    await execute_write(_INSERT_CHARACTER_QUERY, (movie_id, actor_id, character_name))
