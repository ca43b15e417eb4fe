"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

ASSET_DIR = Path(__file__).resolve().parent / "assets"


class Settings(BaseSettings):
    tcws_env: str = "development"
    tcws_log_level: str = "info"

    # Static assets, read fresh on every format call
    tcws_map_path: Path = ASSET_DIR / "map.svg"
    tcws_overlay_path: Path = ASSET_DIR / "overlay.svg"

    # Source of the base map for the prepare-map tool
    tcws_map_source_url: str = (
        "https://upload.wikimedia.org/wikipedia/commons/9/9a/"
        "Municipalities_of_the_Philippines_%28simplified%29.svg"
    )

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
