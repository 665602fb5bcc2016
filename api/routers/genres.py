from fastapi import APIRouter, HTTPException, Path, Response, status

from api.errors import raise_for_store_error
from db.genres import create_genre, delete_genre, find_genre, list_genres, update_genre
from implementation.classes.errors import StoreError
from implementation.classes.schemas import CreatedResponse, Genre, GenrePayload

router = APIRouter(prefix="/genres", tags=["genres"])


@router.get("", response_model=list[Genre])
async def get_genres():
    return await list_genres()


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def post_genre(payload: GenrePayload):
    try:
        genre_id = await create_genre(payload.name)
    except StoreError as exc:
        raise_for_store_error(exc, conflict="genre already exists")
    return CreatedResponse(id=genre_id, path=f"{router.prefix}/{genre_id}")


@router.get("/{genre_id}", response_model=Genre)
async def get_genre(genre_id: int = Path(..., ge=1)):
    genre = await find_genre(genre_id)
    if genre is None:
        raise HTTPException(status_code=404, detail="Genre not found")
    return genre


@router.put("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
async def put_genre(payload: GenrePayload, genre_id: int = Path(..., ge=1)):
    try:
        found = await update_genre(genre_id, payload.name)
    except StoreError as exc:
        raise_for_store_error(exc, conflict="genre already exists")
    if not found:
        raise HTTPException(status_code=404, detail="Genre not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_genre(genre_id: int = Path(..., ge=1)):
    try:
        found = await delete_genre(genre_id)
    except StoreError as exc:
        raise_for_store_error(exc, referential="genre has related movies")
    if not found:
        raise HTTPException(status_code=404, detail="Genre not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
