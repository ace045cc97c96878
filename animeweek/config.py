# animeweek/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Values in the real environment win over the .env file.
load_dotenv()

DEFAULT_BASE_URL = "https://api.jikan.moe/v4"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


@dataclass(slots=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    base_url: str = DEFAULT_BASE_URL
    max_retries: int = 3
    retry_delay_ms: int = 500
    request_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            host=os.getenv("ANIMEWEEK_HOST", "0.0.0.0"),
            port=_env_int("ANIMEWEEK_PORT", _env_int("PORT", 5000)),
            debug=_env_bool("ANIMEWEEK_DEBUG", False),
            base_url=os.getenv("JIKAN_BASE_URL", DEFAULT_BASE_URL),
            max_retries=_env_int("ANIMEWEEK_MAX_RETRIES", 3),
            retry_delay_ms=_env_int("ANIMEWEEK_RETRY_DELAY_MS", 500),
            request_timeout=_env_float("ANIMEWEEK_REQUEST_TIMEOUT", 10.0),
            log_level=os.getenv("ANIMEWEEK_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
    )
