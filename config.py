import os


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


# MongoDB settings
MONGO_URI = os.getenv("MONGO_URI", "")
MONGO_DB = os.getenv("MONGO_DB", "filmycosmo")

# Admin session
SESSION_SECRET = os.getenv("SESSION_SECRET", "change-this-secret")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# Shortlink provider: GET <SHORTLINK_URL>?api=<SHORTLINK_API>&url=<link>
SHORTLINK_API = os.getenv("SHORTLINK_API", "")
SHORTLINK_URL = os.getenv("SHORTLINK_URL", "")
SHORTLINK_TIMEOUT_SECONDS = _env_float("SHORTLINK_TIMEOUT_SECONDS", 10.0)
# 1 = one link at a time, in order
SHORTLINK_CONCURRENCY = max(1, _env_int("SHORTLINK_CONCURRENCY", 1))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = _env_int("PORT", 8000)

# Home page layout defaults (settings collection, _id="home_layout")
HOME_CONFIG_DEFAULTS = {
    "heroTitle": "Welcome to FilmyCosmo",
    "heroSubtitle": (
        "Explore the latest movies, discover trending films, and enjoy a "
        "curated selection from around the cosmos."
    ),
    "showTrending": True,
    "showSearch": True,
    "showGenres": True,
}
