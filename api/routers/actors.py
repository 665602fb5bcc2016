from fastapi import APIRouter, HTTPException, Path, Response, status

from api.errors import raise_for_store_error
from db.actors import (
    create_actor,
    delete_actor,
    find_actor,
    list_actor_characters,
    list_actor_movies,
    list_actors,
    update_actor,
)
from db.cast import add_character
from db.genre_affinity import find_favorite_genre
from implementation.classes.errors import StoreError
from implementation.classes.schemas import (
    Actor,
    ActorCharacter,
    ActorPayload,
    CharacterPayload,
    CreatedResponse,
    FavoriteGenre,
    Movie,
)

router = APIRouter(prefix="/actors", tags=["actors"])


async def _actor_or_404(actor_id: int) -> Actor:
    actor = await find_actor(actor_id)
    if actor is None:
        raise HTTPException(status_code=404, detail="Actor not found")
    return actor


@router.get("", response_model=list[Actor])
async def get_actors():
    return await list_actors()


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def post_actor(payload: ActorPayload):
    try:
        actor_id = await create_actor(payload.name, payload.born_at, payload.bio)
    except StoreError as exc:
        raise_for_store_error(exc, conflict="actor already exists")
    return CreatedResponse(id=actor_id, path=f"{router.prefix}/{actor_id}")


@router.get("/{actor_id}", response_model=Actor)
async def get_actor(actor_id: int = Path(..., ge=1)):
    return await _actor_or_404(actor_id)


@router.put("/{actor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def put_actor(payload: ActorPayload, actor_id: int = Path(..., ge=1)):
    try:
        found = await update_actor(actor_id, payload.name, payload.born_at, payload.bio)
    except StoreError as exc:
        raise_for_store_error(exc, conflict="actor already exists")
    if not found:
        raise HTTPException(status_code=404, detail="Actor not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{actor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_actor(actor_id: int = Path(..., ge=1)):
    try:
        found = await delete_actor(actor_id)
    except StoreError as exc:
        raise_for_store_error(exc, referential="actor has related movies")
    if not found:
        raise HTTPException(status_code=404, detail="Actor not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{actor_id}/movies", response_model=list[Movie])
async def get_actor_movies(actor_id: int = Path(..., ge=1)):
    await _actor_or_404(actor_id)
    return await list_actor_movies(actor_id)


@router.get("/{actor_id}/characters", response_model=list[ActorCharacter])
async def get_actor_characters(actor_id: int = Path(..., ge=1)):
    await _actor_or_404(actor_id)
    return await list_actor_characters(actor_id)


@router.post(
    "/{actor_id}/characters",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_actor_character(payload: CharacterPayload, actor_id: int = Path(..., ge=1)):
    try:
        await add_character(actor_id, payload.movie_id, payload.character_name)
    except StoreError as exc:
        raise_for_store_error(
            exc,
            conflict="actor is already in the movie cast",
            referential="related movie or actor does not exist",
        )
    return CreatedResponse(
        id=payload.movie_id,
        path=f"{router.prefix}/{actor_id}/characters/{payload.movie_id}",
    )


@router.get("/{actor_id}/genre/favourite", response_model=FavoriteGenre)
async def get_actor_favourite_genre(actor_id: int = Path(..., ge=1)):
    await _actor_or_404(actor_id)
    return FavoriteGenre(actor_id=actor_id, genre=await find_favorite_genre(actor_id))
