# routes/admin_movies.py

from fastapi import APIRouter, Depends, Request

from dependencies import get_movie_service
from movie_service import MovieService
from .admin_auth import require_admin
from .payload import read_payload

router = APIRouter(prefix="/api/movies", dependencies=[Depends(require_admin)])


# ---------- MOVIES ADMIN: LIST + ADD ----------


@router.get("/admin/all")
async def admin_list_movies(
    q: str = "",
    service: MovieService = Depends(get_movie_service),
):
    """All movies including hidden ones, newest first."""
    return await service.list_movies(include_hidden=True, q=q)


@router.post("")
async def admin_create_movie(request: Request, service: MovieService = Depends(get_movie_service)):
    """
    Accepts JSON or form bodies. download_links may be a JSON string, a list
    or a quality keyed map; every valid link also gets a short link.
    """
    payload = await read_payload(request)
    movie = await service.create_movie(payload, created_by="admin")
    return {"msg": "Movie added successfully", "movie": movie}


# ---------- MOVIES ADMIN: EDIT + DELETE ----------


@router.put("/{movie_id}")
async def admin_update_movie(
    request: Request,
    movie_id: str,
    service: MovieService = Depends(get_movie_service),
):
    # fields left out of the body keep their stored values
    payload = await read_payload(request)
    movie = await service.update_movie(movie_id, payload)
    return {"msg": "Movie updated successfully", "movie": movie}


@router.delete("/{movie_id}")
async def admin_delete_movie(movie_id: str, service: MovieService = Depends(get_movie_service)):
    await service.delete_movie(movie_id)
    return {"msg": "Movie deleted successfully"}
