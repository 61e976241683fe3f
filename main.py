import logging
from contextlib import asynccontextmanager
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware
from structlog.contextvars import bind_contextvars, reset_contextvars

# ==================== IMPORTS FROM YOUR MODULES ====================
from config import LOG_LEVEL, PORT, SESSION_SECRET
from db import close_mongo_connection, connect_to_mongo
from errors import CatalogError
from logging_config import configure_logging
from routes.admin_auth import router as admin_auth_router
from routes.admin_movies import router as admin_movies_router
from routes.home_config import router as home_config_router
from routes.movies import router as movies_router

logger = logging.getLogger("filmycosmo.app")


# ==================== STARTUP/SHUTDOWN ====================
@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging(LOG_LEVEL)
    await connect_to_mongo()
    logger.info("FilmyCosmo API startup complete")
    try:
        yield
    finally:
        await close_mongo_connection()
        logger.info("FilmyCosmo API shutting down")


async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"msg": exc.message}, status_code=exc.status_code)


async def request_context_middleware(request: Request, call_next):
    incoming = request.headers.get("X-Request-ID", "").strip()
    request_id = incoming or str(uuid4())
    tokens = bind_contextvars(
        http_request_id=request_id,
        http_method=request.method,
        http_path=request.url.path,
    )
    try:
        response = await call_next(request)
    finally:
        reset_contextvars(**tokens)
    response.headers["X-Request-ID"] = request_id
    return response


def create_app() -> FastAPI:
    # ==================== FASTAPI SETUP ====================
    app = FastAPI(title="FilmyCosmo API", lifespan=lifespan)
    app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)
    app.middleware("http")(request_context_middleware)
    app.add_exception_handler(CatalogError, catalog_error_handler)

    # ==================== INCLUDE ALL ROUTERS ====================
    app.include_router(admin_auth_router)
    app.include_router(admin_movies_router)
    app.include_router(movies_router)
    app.include_router(home_config_router)

    # ==================== HEALTH CHECK ROUTES ====================
    @app.get("/status")
    async def status():
        return {"status": "ok"}

    @app.get("/")
    async def root():
        return {"message": "FilmyCosmo API is running."}

    return app


app = create_app()


# ==================== RUN SERVER ====================
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=False)
