# home_config_store.py

# Home page layout lives in Mongo (db.settings), _id="home_layout":
#
#   heroTitle: str, heroSubtitle: str,
#   showTrending / showSearch / showGenres: bool
#
# Missing document or missing keys fall back to HOME_CONFIG_DEFAULTS.

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from config import HOME_CONFIG_DEFAULTS
from errors import StorageError
from field_reconciler import MISSING, coerce_bool, coerce_text
from models import HomeConfig, HomeConfigUpdate
from movie_store import utc_now

logger = logging.getLogger("filmycosmo.home_config")

HOME_CONFIG_ID = "home_layout"
TEXT_FIELDS = ("heroTitle", "heroSubtitle")
FLAG_FIELDS = ("showTrending", "showSearch", "showGenres")


def parse_home_config_update(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only supplied, well-typed fields. Anything else is ignored."""
    update: Dict[str, Any] = {}
    for field in TEXT_FIELDS:
        if field in raw and raw[field] is not None:
            update[field] = coerce_text(raw[field])
    for field in FLAG_FIELDS:
        if field in raw:
            update[field] = coerce_bool(raw[field])
    update = {field: value for field, value in update.items() if value is not MISSING}
    return HomeConfigUpdate(**update).model_dump(exclude_none=True)


class HomeConfigStore:
    def __init__(self, collection):
        self.collection = collection

    @staticmethod
    def _merge(doc: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        values = dict(HOME_CONFIG_DEFAULTS)
        for key in HOME_CONFIG_DEFAULTS:
            if not doc or doc.get(key) is None:
                continue
            try:
                stored = HomeConfigUpdate.model_validate({key: doc[key]})
            except PydanticValidationError:
                logger.warning("ignoring malformed stored home config key=%s", key)
                continue
            values[key] = getattr(stored, key)
        return HomeConfig(**values).model_dump()

    async def get(self) -> Dict[str, Any]:
        try:
            doc = await self.collection.find_one({"_id": HOME_CONFIG_ID})
        except PyMongoError as exc:
            logger.exception("loading home config failed")
            raise StorageError(f"Failed to load home layout: {exc}") from exc
        return self._merge(doc)

    async def update(self, raw: Mapping[str, Any], updated_by: Optional[str] = None) -> Dict[str, Any]:
        update = parse_home_config_update(raw)
        if update:
            fields = dict(update)
            fields["updatedAt"] = utc_now()
            if updated_by:
                fields["updated_by"] = updated_by
            try:
                await self.collection.update_one(
                    {"_id": HOME_CONFIG_ID},
                    {"$set": fields},
                    upsert=True,
                )
            except PyMongoError as exc:
                logger.exception("saving home config failed")
                raise StorageError(f"Failed to update home layout: {exc}") from exc
            logger.info("home config updated fields=%s", sorted(update))
        return await self.get()
