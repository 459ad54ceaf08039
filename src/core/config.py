"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "NearbyCare/1.0 (contact@example.com)"


@dataclass(frozen=True)
class Settings:
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    user_agent: str = DEFAULT_USER_AGENT
    geocode_timeout: float = 10.0
    overpass_timeout: float = 30.0
    search_deadline_seconds: float = 120.0
    worker_port: int = 8001


def _positive_seconds(name: str, default: float) -> float:
    value = float(os.getenv(name, str(default)))
    if value <= 0:
        logger.warning("%s must be positive; using %s", name, default)
        return default
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    defaults = Settings()
    nominatim_url = os.getenv("NOMINATIM_URL", "").strip() or defaults.nominatim_url
    overpass_url = os.getenv("OVERPASS_URL", "").strip() or defaults.overpass_url
    user_agent = os.getenv("HTTP_USER_AGENT", "").strip() or defaults.user_agent
    geocode_timeout = _positive_seconds("GEOCODE_TIMEOUT_SECONDS", defaults.geocode_timeout)
    overpass_timeout = _positive_seconds("OVERPASS_TIMEOUT_SECONDS", defaults.overpass_timeout)
    search_deadline_seconds = _positive_seconds("SEARCH_DEADLINE_SECONDS", defaults.search_deadline_seconds)
    worker_port = int(os.getenv("PORT") or os.getenv("WORKER_PORT") or defaults.worker_port)

    if user_agent == DEFAULT_USER_AGENT:
        logger.warning("HTTP_USER_AGENT is not configured; Nominatim may throttle the default agent.")

    return Settings(
        nominatim_url=nominatim_url,
        overpass_url=overpass_url,
        user_agent=user_agent,
        geocode_timeout=geocode_timeout,
        overpass_timeout=overpass_timeout,
        search_deadline_seconds=search_deadline_seconds,
        worker_port=worker_port,
    )
