"""Unit tests for the /genres routes."""

from unittest.mock import AsyncMock

import pytest

from implementation.classes.enums import StoreErrorKind
from implementation.classes.errors import StoreError
from implementation.classes.schemas import Genre


def test_get_genres_returns_all_genres(client, mocker) -> None:
    mocker.patch(
        "api.routers.genres.list_genres",
        new=AsyncMock(return_value=[Genre(id=1, name="Action"), Genre(id=2, name="Horror")]),
    )
    response = client.get("/genres")
    assert response.status_code == 200
    assert response.json() == [{"id": 1, "name": "Action"}, {"id": 2, "name": "Horror"}]


@pytest.mark.parametrize("payload", [None, {"unexpected": "object"}, {"name": ""}])
def test_post_genre_validates_payload(client, mocker, payload) -> None:
    create = mocker.patch("api.routers.genres.create_genre", new=AsyncMock())
    response = client.post("/genres", json=payload)
    assert response.status_code == 400
    create.assert_not_awaited()


def test_post_genre_returns_409_on_duplicate_name(client, mocker) -> None:
    mocker.patch(
        "api.routers.genres.create_genre",
        new=AsyncMock(side_effect=StoreError(StoreErrorKind.DUPLICATE_KEY, "duplicate key value")),
    )
    response = client.post("/genres", json={"name": "Horror"})
    assert response.status_code == 409


def test_post_genre_returns_201_with_id_and_path(client, mocker) -> None:
    create = mocker.patch("api.routers.genres.create_genre", new=AsyncMock(return_value=123))
    response = client.post("/genres", json={"name": "Horror"})
    assert response.status_code == 201
    assert response.json() == {"id": 123, "path": "/genres/123"}
    create.assert_awaited_once_with("Horror")


@pytest.mark.parametrize("raw_id", ["abc", "0", "-1"])
def test_get_genre_validates_id(client, raw_id) -> None:
    assert client.get(f"/genres/{raw_id}").status_code == 400


def test_get_genre_returns_404_when_missing(client, mocker) -> None:
    mocker.patch("api.routers.genres.find_genre", new=AsyncMock(return_value=None))
    assert client.get("/genres/123").status_code == 404


def test_get_genre_returns_one_genre(client, mocker) -> None:
    find = mocker.patch("api.routers.genres.find_genre", new=AsyncMock(return_value=Genre(id=123, name="Drama")))
    response = client.get("/genres/123")
    assert response.status_code == 200
    assert response.json() == {"id": 123, "name": "Drama"}
    find.assert_awaited_once_with(123)


def test_put_genre_returns_404_when_missing(client, mocker) -> None:
    mocker.patch("api.routers.genres.update_genre", new=AsyncMock(return_value=False))
    assert client.put("/genres/123", json={"name": "Drama"}).status_code == 404


def test_put_genre_returns_409_on_duplicate_name(client, mocker) -> None:
    mocker.patch(
        "api.routers.genres.update_genre",
        new=AsyncMock(side_effect=StoreError(StoreErrorKind.DUPLICATE_KEY)),
    )
    assert client.put("/genres/123", json={"name": "Drama"}).status_code == 409


def test_put_genre_returns_204(client, mocker) -> None:
    update = mocker.patch("api.routers.genres.update_genre", new=AsyncMock(return_value=True))
    response = client.put("/genres/123", json={"name": "Drama"})
    assert response.status_code == 204
    assert response.content == b""
    update.assert_awaited_once_with(123, "Drama")


def test_delete_genre_returns_404_when_missing(client, mocker) -> None:
    mocker.patch("api.routers.genres.delete_genre", new=AsyncMock(return_value=False))
    assert client.delete("/genres/123").status_code == 404


def test_delete_genre_returns_400_when_referenced_by_movies(client, mocker) -> None:
    mocker.patch(
        "api.routers.genres.delete_genre",
        new=AsyncMock(side_effect=StoreError(StoreErrorKind.REFERENTIAL_VIOLATION)),
    )
    response = client.delete("/genres/123")
    assert response.status_code == 400
    assert response.json()["detail"] == "genre has related movies"


def test_delete_genre_returns_204(client, mocker) -> None:
    mocker.patch("api.routers.genres.delete_genre", new=AsyncMock(return_value=True))
    assert client.delete("/genres/123").status_code == 204


def test_transport_failure_returns_503(client, mocker) -> None:
    mocker.patch(
        "api.routers.genres.list_genres",
        new=AsyncMock(side_effect=StoreError(StoreErrorKind.TRANSPORT, "connection refused")),
    )
    response = client.get("/genres")
    assert response.status_code == 503
    assert response.json() == {"detail": "database unavailable"}
