"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tcws_map import __version__
from tcws_map.config import Settings
from tcws_map.dependencies import get_settings
from tcws_map.engine.registry import get_registry
from tcws_map.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        stages_registered=get_registry().count,
        map_asset_present=settings.tcws_map_path.is_file(),
    )
