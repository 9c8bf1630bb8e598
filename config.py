# config.py
import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_POKEAPI_BASE = "https://pokeapi.co/api/v2"
DEFAULT_CACHE_TTL = 60 * 10  # seconds
DEFAULT_TIMEOUT = 20


def _origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass
class Settings:
    pokeapi_base: str = DEFAULT_POKEAPI_BASE
    cache_ttl: float = DEFAULT_CACHE_TTL
    timeout: float = DEFAULT_TIMEOUT
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from the environment, falling back to the defaults."""
    return Settings(
        pokeapi_base=os.getenv("POKEAPI_BASE", DEFAULT_POKEAPI_BASE).rstrip("/"),
        cache_ttl=float(os.getenv("POKEAPI_CACHE_TTL", DEFAULT_CACHE_TTL)),
        timeout=float(os.getenv("POKEAPI_TIMEOUT", DEFAULT_TIMEOUT)),
        allowed_origins=_origins(os.getenv("ALLOWED_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
