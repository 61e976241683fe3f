# routes/home_config.py

from fastapi import APIRouter, Depends, Request

from dependencies import get_home_config_store
from home_config_store import HomeConfigStore
from .admin_auth import require_admin
from .payload import read_payload

router = APIRouter(prefix="/api/home-config")


@router.get("")
async def get_home_config(store: HomeConfigStore = Depends(get_home_config_store)):
    return await store.get()


@router.put("", dependencies=[Depends(require_admin)])
async def update_home_config(
    request: Request,
    store: HomeConfigStore = Depends(get_home_config_store),
):
    payload = await read_payload(request)
    config = await store.update(payload, updated_by="admin")
    return {"msg": "Home layout updated successfully", "config": config}
