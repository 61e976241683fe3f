"""
Movie write/read pipeline.

Write path: submitted fields -> field reconciler -> link normalizer ->
link shortener -> store. The store call is the only commit point: a
validation or storage error leaves the persisted record exactly as it was.

Read path: stored record -> response shape that mirrors canonical fields under
their legacy names so older clients keep working.
"""
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from errors import NotFoundError, StorageError, ValidationError
from field_reconciler import download_links_payload, has_download_links, reconcile_fields
from link_normalizer import normalize_download_links, normalize_short_links
from movie_store import MovieStore, to_object_id
from shortlinks import LinkShortener

logger = logging.getLogger("filmycosmo.movies")

PUBLIC_FILTER = {"movie_show": {"$ne": False}}


def _json_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def transform_movie(doc: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Stored record -> response dict with both naming conventions."""
    if not doc:
        return None

    movie = {key: _json_value(value) for key, value in doc.items()}
    if "_id" in movie:
        movie["_id"] = str(movie["_id"])
        movie["id"] = movie["_id"]
    if movie.get("created_by") is not None:
        movie["created_by"] = str(movie["created_by"])

    download_links = doc.get("download_links")
    download_links = list(download_links) if isinstance(download_links, list) else []
    short_links = [
        link.model_dump(exclude_none=True)
        for link in normalize_short_links(doc.get("short_links"))
    ]
    movie_show = doc.get("movie_show")

    movie.update(
        {
            "download_links": download_links,
            "short_links": short_links,
            "title": doc.get("movie_name") or doc.get("title"),
            "posterUrl": doc.get("movie_poster") or doc.get("posterUrl"),
            "description": doc.get("movie_description") or doc.get("description"),
            "year": doc.get("movie_year") or doc.get("year"),
            "tags": doc.get("movie_tags") or doc.get("movie_genre") or doc.get("tags") or [],
            "isActive": movie_show if movie_show is not None else doc.get("isActive") is not False,
            "trending": bool(doc.get("trending", False)),
            "screenshots": doc.get("movie_screenshots") or doc.get("screenshots") or [],
            "downloadLinks": download_links,
            "shortLinks": short_links,
        }
    )
    return movie


class MovieService:
    def __init__(self, store: MovieStore, shortener: LinkShortener):
        self.store = store
        self.shortener = shortener

    async def _build_links(self, raw_links: Any) -> Dict[str, List[Dict[str, Any]]]:
        download_links = normalize_download_links(raw_links)
        short_links = await self.shortener.shorten(download_links)
        return {
            "download_links": [link.model_dump(exclude_none=True) for link in download_links],
            "short_links": [link.model_dump(exclude_none=True) for link in short_links],
        }

    # ---------- READS ----------

    async def list_movies(
        self,
        *,
        include_hidden: bool = False,
        q: str = "",
        trending: Optional[bool] = None,
    ) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {} if include_hidden else dict(PUBLIC_FILTER)
        if q.strip():
            query["movie_name"] = {"$regex": re.escape(q.strip()), "$options": "i"}
        if trending is not None:
            query["trending"] = True if trending else {"$ne": True}

        docs = await self.store.find_many(query)
        return [transform_movie(doc) for doc in docs]

    async def get_movie(self, movie_id: str, *, include_hidden: bool = False) -> Dict[str, Any]:
        doc = await self.store.find_by_id(movie_id)
        if not doc:
            raise NotFoundError("Movie not found")
        if doc.get("movie_show") is False and not include_hidden:
            raise NotFoundError("Movie not found")
        return transform_movie(doc)

    # ---------- WRITES ----------

    async def create_movie(self, raw: Mapping[str, Any], created_by: Optional[str] = None) -> Dict[str, Any]:
        fields = reconcile_fields(raw, creating=True)
        fields.update(await self._build_links(download_links_payload(raw)))
        if created_by:
            fields["created_by"] = created_by

        doc = await self.store.create(fields)
        logger.info(
            "movie created id=%s name=%s links=%d",
            doc["_id"],
            doc["movie_name"],
            len(fields["download_links"]),
        )
        return transform_movie(doc)

    async def update_movie(self, movie_id: str, raw: Mapping[str, Any]) -> Dict[str, Any]:
        current = await self.store.find_by_id(movie_id)
        if not current:
            raise NotFoundError("Movie not found")

        changes = reconcile_fields(raw, creating=False)
        if has_download_links(raw):
            # replaced, not merged: click counts survive only if echoed back
            changes.update(await self._build_links(download_links_payload(raw)))

        saved = await self.store.save(current["_id"], changes)
        logger.info("movie updated id=%s fields=%s", saved["_id"], sorted(changes))
        return transform_movie(saved)

    async def delete_movie(self, movie_id: str) -> None:
        if to_object_id(movie_id) is None:
            raise ValidationError("Invalid Movie ID")
        if not await self.store.delete_by_id(movie_id):
            raise NotFoundError("Movie not found")
        logger.info("movie deleted id=%s", movie_id)

    async def track_click(self, movie_id: str, link_index: int) -> int:
        if to_object_id(movie_id) is None:
            raise ValidationError("Invalid Movie ID")

        doc = await self.store.find_by_id(movie_id)
        if not doc:
            raise NotFoundError("Movie not found")

        links = doc.get("download_links") or []
        if link_index < 0 or link_index >= len(links):
            raise ValidationError("Invalid link index")

        count = await self.store.increment_click(movie_id, link_index)
        if count is None:
            raise StorageError("Click tracking failed: link no longer exists")
        return count
