# routes/movies.py

from typing import Optional

from fastapi import APIRouter, Depends

from dependencies import get_movie_service
from errors import ValidationError
from movie_service import MovieService

router = APIRouter(prefix="/api/movies")


# ---------- PUBLIC LIST / DETAIL ----------


@router.get("")
async def list_movies(
    q: str = "",
    trending: Optional[bool] = None,
    service: MovieService = Depends(get_movie_service),
):
    """Visible movies only, newest first."""
    return await service.list_movies(q=q, trending=trending)


@router.get("/{movie_id}")
async def get_movie(movie_id: str, service: MovieService = Depends(get_movie_service)):
    # hidden movies are 404 here; admins use /api/movies/admin/all
    return await service.get_movie(movie_id)


# ---------- CLICK TRACKING ----------


@router.post("/{movie_id}/link/{link_index}/click")
async def track_link_click(
    movie_id: str,
    link_index: str,
    service: MovieService = Depends(get_movie_service),
):
    try:
        index = int(link_index)
    except ValueError:
        raise ValidationError("Invalid link index")

    count = await service.track_click(movie_id, index)
    return {"msg": "Click tracked successfully", "click_count": count}
