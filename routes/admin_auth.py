# routes/admin_auth.py

import logging
import secrets

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from config import ADMIN_PASSWORD
from models import AdminLogin
from .payload import read_payload

router = APIRouter(prefix="/api/admin")
logger = logging.getLogger("filmycosmo.admin")


def is_admin(request: Request) -> bool:
    return request.session.get("is_admin") is True


def require_admin(request: Request) -> None:
    """Route dependency for admin-only endpoints."""
    if not is_admin(request):
        raise HTTPException(status_code=401, detail="Not authenticated")


# ---------- LOGIN / LOGOUT ----------


@router.post("/login")
async def admin_login(request: Request):
    payload = await read_payload(request)
    try:
        login = AdminLogin.model_validate(payload)
    except PydanticValidationError:
        return JSONResponse({"msg": "Password is required"}, status_code=400)

    if secrets.compare_digest(login.password.encode(), ADMIN_PASSWORD.encode()):
        request.session["is_admin"] = True
        logger.info("admin login")
        return {"msg": "Logged in", "is_admin": True}

    logger.warning("admin login rejected")
    return JSONResponse({"msg": "Invalid password"}, status_code=401)


@router.post("/logout")
async def admin_logout(request: Request):
    request.session.clear()
    return {"msg": "Logged out", "is_admin": False}


@router.get("/me")
async def admin_me(request: Request):
    return {"is_admin": is_admin(request)}
