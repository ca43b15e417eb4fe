"""POST /api/render: bulletin in, signal map SVG out."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from tcws_map.dependencies import get_formatter
from tcws_map.errors import AssetError, FormatterError, StageError
from tcws_map.formatter import SignalsFormatter
from tcws_map.models.bulletin import Bulletin

logger = logging.getLogger(__name__)

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"


@router.post("/render", response_class=Response)
async def render(
    bulletin: Bulletin,
    formatter: SignalsFormatter = Depends(get_formatter),
) -> Response:
    loop = asyncio.get_running_loop()
    try:
        # Geometry work is CPU-bound; keep the event loop free.
        svg = await loop.run_in_executor(None, formatter.format, bulletin)
    except AssetError as e:
        logger.error("Render failed, asset unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e)) from e
    except StageError as e:
        if isinstance(e.__cause__, AssetError):
            raise HTTPException(status_code=503, detail=str(e)) from e
        logger.warning("Render failed in %s: %s", e.stage_id, e)
        raise HTTPException(status_code=422, detail=str(e)) from e
    except FormatterError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return Response(
        content=svg,
        media_type=SVG_MEDIA_TYPE,
        headers={"Content-Disposition": f'inline; filename="tcws-{bulletin.info.count}.svg"'},
    )
