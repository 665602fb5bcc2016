"""Unit tests for db.genre_affinity."""

from unittest.mock import AsyncMock

import pytest

from db import genre_affinity
from implementation.classes.schemas import GenreFrequency


def _patch_rows(mocker, rows):
    return mocker.patch("db.genre_affinity.execute_read", new=AsyncMock(return_value=rows))


@pytest.mark.asyncio
async def test_list_genre_frequency_queries_join_path(mocker) -> None:
    """list_genre_frequency should group the actor's appearances by genre name."""
    read = _patch_rows(mocker, [("Horror", 7), ("Action", 2), ("Romance", 1)])
    result = await genre_affinity.list_genre_frequency(1)

    query, params = read.await_args.args
    assert params == (1,)
    assert "JOIN movie_actor" in query
    assert "JOIN genre" in query
    assert "GROUP BY genre.name" in query
    assert result == [
        GenreFrequency(genre="Horror", frequency=7),
        GenreFrequency(genre="Action", frequency=2),
        GenreFrequency(genre="Romance", frequency=1),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("rows", "expected"),
    [
        ([("Action", 2), ("Horror", 7), ("Romance", 1)], "Horror"),
        ([("Action", 2), ("Romance", 1), ("Mystery", 4), ("Horror", 1), ("Thriller", 1)], "Mystery"),
        ([("Romance", 1), ("Horror", 1)], "Horror"),
        ([("Horror", 1), ("Romance", 1)], "Horror"),
        ([("Drama", 3)], "Drama"),
    ],
)
async def test_find_favorite_genre_picks_most_frequent(mocker, rows, expected) -> None:
    """The most frequent genre wins; ties go to the alphabetically first name."""
    _patch_rows(mocker, rows)
    assert await genre_affinity.find_favorite_genre(1) == expected


@pytest.mark.asyncio
async def test_find_favorite_genre_returns_none_without_appearances(mocker) -> None:
    """An actor with no cast appearances has no favorite genre."""
    _patch_rows(mocker, [])
    assert await genre_affinity.find_favorite_genre(1) is None


def test_pick_favorite_genre_ignores_input_order() -> None:
    """Reordering the frequencies must not change the favorite."""
    frequencies = [
        GenreFrequency(genre="Thriller", frequency=4),
        GenreFrequency(genre="Comedy", frequency=4),
        GenreFrequency(genre="Action", frequency=1),
    ]
    assert genre_affinity.pick_favorite_genre(frequencies) == "Comedy"
    assert genre_affinity.pick_favorite_genre(list(reversed(frequencies))) == "Comedy"
