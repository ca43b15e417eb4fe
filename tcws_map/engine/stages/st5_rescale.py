"""S5.01: Uniform rescale so the long edge equals the target pixel size."""

from __future__ import annotations

import logging

from tcws_map.engine.context import FormatContext
from tcws_map.engine.registry import Phase, stage
from tcws_map.svg.document import MapDocument
from tcws_map.svg.scale import scale_tree

logger = logging.getLogger(__name__)


def rescale_factor(width: float, height: float, target_size: float) -> float:
    long_edge = width if width / height >= 1 else height
    return target_size / long_edge


def rescale(document: MapDocument, target_size: float, places: int = 2) -> float:
    """Scale the whole document in place. Returns the factor applied."""
    factor = rescale_factor(document.width, document.height, target_size)
    scale_tree(document.root, factor, places)
    document.invalidate_geometry()
    return factor


@stage(
    id="S5.01",
    phase=Phase.RESCALE,
    dependencies=["S4.02"],
    description="Scale the document to the target pixel size",
)
def rescale_stage(ctx: FormatContext) -> None:
    ctx.scale_factor = rescale(ctx.document, ctx.config.target_size, ctx.config.decimal_places)
    logger.debug("Rescaled by %.5f to %.0f×%.0f", ctx.scale_factor, ctx.document.width, ctx.document.height)
