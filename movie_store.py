# movie_store.py

# Thin async store over the "movies" collection. Every pymongo failure is
# reported as StorageError; malformed ids behave like missing records.

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from errors import StorageError

logger = logging.getLogger("filmycosmo.store")

NEWEST_FIRST: Sequence[Tuple[str, int]] = (("createdAt", -1), ("_id", -1))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(movie_id: Any) -> Optional[ObjectId]:
    if isinstance(movie_id, ObjectId):
        return movie_id
    try:
        return ObjectId(str(movie_id))
    except (InvalidId, TypeError):
        return None


class MovieStore:
    def __init__(self, collection):
        self.collection = collection

    async def find_by_id(self, movie_id: Any) -> Optional[Dict[str, Any]]:
        oid = to_object_id(movie_id)
        if oid is None:
            return None
        try:
            return await self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            logger.exception("find_by_id failed id=%s", movie_id)
            raise StorageError(f"Failed to load movie: {exc}") from exc

    async def find_many(
        self,
        query: Optional[Dict[str, Any]] = None,
        sort: Sequence[Tuple[str, int]] = NEWEST_FIRST,
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self.collection.find(query or {}).sort(list(sort))
            return [doc async for doc in cursor]
        except PyMongoError as exc:
            logger.exception("find_many failed query=%s", query)
            raise StorageError(f"Failed to list movies: {exc}") from exc

    async def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        now = utc_now()
        doc = dict(fields)
        doc["createdAt"] = now
        doc["updatedAt"] = now
        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as exc:
            logger.exception("create failed name=%s", fields.get("movie_name"))
            raise StorageError(f"Movie creation failed: {exc}") from exc
        doc["_id"] = result.inserted_id
        return doc

    async def save(self, movie_id: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Commit point of an update: $set only the changed fields in one write,
        so concurrent writes to other fields (click counts) are kept.
        Returns the record as stored after the write.
        """
        oid = to_object_id(movie_id)
        if oid is None:
            raise StorageError("Movie update failed: invalid id")
        fields = dict(changes)
        fields["updatedAt"] = utc_now()
        try:
            result = await self.collection.update_one({"_id": oid}, {"$set": fields})
            if result.matched_count == 0:
                raise StorageError("Movie update failed: record no longer exists")
            saved = await self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            logger.exception("save failed id=%s", movie_id)
            raise StorageError(f"Movie update failed: {exc}") from exc
        if not saved:
            raise StorageError("Movie update failed: record no longer exists")
        return saved

    async def delete_by_id(self, movie_id: Any) -> bool:
        oid = to_object_id(movie_id)
        if oid is None:
            return False
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as exc:
            logger.exception("delete failed id=%s", movie_id)
            raise StorageError(f"Movie deletion failed: {exc}") from exc
        return result.deleted_count > 0

    async def increment_click(self, movie_id: Any, link_index: int) -> Optional[int]:
        """
        Atomically bump download_links[link_index].click_count.
        Returns the new count, or None when the record or index no longer exists.
        """
        oid = to_object_id(movie_id)
        if oid is None:
            return None
        path = f"download_links.{link_index}"
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": oid, path: {"$exists": True}},
                {"$inc": {f"{path}.click_count": 1}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            logger.exception("click tracking failed id=%s index=%s", movie_id, link_index)
            raise StorageError(f"Click tracking failed: {exc}") from exc
        if not doc:
            return None
        return int(doc["download_links"][link_index].get("click_count", 0))
