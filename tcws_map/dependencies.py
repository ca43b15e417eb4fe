"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from tcws_map.config import Settings, settings
from tcws_map.formatter import SignalsFormatter


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_formatter() -> SignalsFormatter:
    # The formatter holds only configuration; assets are re-read per call.
    return SignalsFormatter()
