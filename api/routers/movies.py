from fastapi import APIRouter, HTTPException, Path, Response, status

from api.errors import raise_for_store_error
from db.cast import link_actors_to_movie
from db.movies import (
    create_movie,
    delete_movie,
    find_movie,
    list_movie_cast,
    list_movies,
    update_movie,
)
from implementation.classes.errors import StoreError
from implementation.classes.schemas import (
    CastLinkResult,
    CastMember,
    CastPayload,
    CreatedResponse,
    Movie,
    MoviePayload,
)

router = APIRouter(prefix="/movies", tags=["movies"])


async def _movie_or_404(movie_id: int) -> Movie:
    movie = await find_movie(movie_id)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


@router.get("", response_model=list[Movie])
async def get_movies():
    return await list_movies()


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def post_movie(payload: MoviePayload):
    try:
        movie_id = await create_movie(
            payload.name,
            payload.released_at,
            payload.runtime,
            payload.genre_id,
            payload.synopsis,
        )
    except StoreError as exc:
        raise_for_store_error(
            exc,
            conflict="movie already exists",
            referential="related genre does not exist",
        )
    return CreatedResponse(id=movie_id, path=f"{router.prefix}/{movie_id}")


@router.get("/{movie_id}", response_model=Movie)
async def get_movie(movie_id: int = Path(..., ge=1)):
    return await _movie_or_404(movie_id)


@router.put("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
async def put_movie(payload: MoviePayload, movie_id: int = Path(..., ge=1)):
    try:
        found = await update_movie(
            movie_id,
            payload.name,
            payload.released_at,
            payload.runtime,
            payload.genre_id,
            payload.synopsis,
        )
    except StoreError as exc:
        raise_for_store_error(
            exc,
            conflict="movie already exists",
            referential="related genre does not exist",
        )
    if not found:
        raise HTTPException(status_code=404, detail="Movie not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_movie(movie_id: int = Path(..., ge=1)):
    try:
        found = await delete_movie(movie_id)
    except StoreError as exc:
        raise_for_store_error(exc, referential="movie has related actors")
    if not found:
        raise HTTPException(status_code=404, detail="Movie not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{movie_id}/cast", response_model=list[CastMember])
async def get_movie_cast(movie_id: int = Path(..., ge=1)):
    await _movie_or_404(movie_id)
    return await list_movie_cast(movie_id)


@router.post("/{movie_id}/cast", response_model=list[CastLinkResult])
async def post_movie_cast(payload: CastPayload, movie_id: int = Path(..., ge=1)):
    """
    Add actors to the movie cast. Actors already in the cast are reported as
    already_linked; unknown actors are reported as failed without affecting
    the others.
    """
    await _movie_or_404(movie_id)
    return await link_actors_to_movie(movie_id, payload.actor_ids)
