from functools import lru_cache

from fastapi import Depends

from config import (
    SHORTLINK_API,
    SHORTLINK_CONCURRENCY,
    SHORTLINK_TIMEOUT_SECONDS,
    SHORTLINK_URL,
)
from db import get_db
from errors import StorageError
from home_config_store import HomeConfigStore
from movie_service import MovieService
from movie_store import MovieStore
from shortlinks import LinkShortener


def get_database():
    db = get_db()
    if db is None:
        raise StorageError("MongoDB not connected", unavailable=True)
    return db


@lru_cache(maxsize=1)
def get_link_shortener() -> LinkShortener:
    return LinkShortener(
        SHORTLINK_URL,
        SHORTLINK_API,
        timeout=SHORTLINK_TIMEOUT_SECONDS,
        concurrency=SHORTLINK_CONCURRENCY,
    )


def get_movie_service(
    db=Depends(get_database),
    shortener: LinkShortener = Depends(get_link_shortener),
) -> MovieService:
    return MovieService(MovieStore(db["movies"]), shortener)


def get_home_config_store(db=Depends(get_database)) -> HomeConfigStore:
    return HomeConfigStore(db["settings"])
