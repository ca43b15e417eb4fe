"""S3.01: Crop and translate.

Resizes the canvas to the view box, prunes features entirely outside it,
moves the rest so the view box origin becomes (0, 0), and sets stroke widths
relative to the new canvas size.
"""

from __future__ import annotations

import logging

from tcws_map.engine.config import FormatterConfig
from tcws_map.engine.context import FormatContext
from tcws_map.engine.registry import Phase, stage
from tcws_map.svg.document import MapDocument, format_number
from tcws_map.svg.paths import translate_path
from tcws_map.utils.geometry import Bounds, has_overlap_2d

logger = logging.getLogger(__name__)


def crop_to_box(document: MapDocument, bounds: Bounds, config: FormatterConfig | None = None) -> int:
    """Crop ``document`` to ``bounds`` in place. Returns the number of features removed."""
    config = config or FormatterConfig()
    width = bounds.width
    height = bounds.height
    document.set_canvas_size(width, height)

    long_edge = max(width, height)
    province_stroke = format_number(long_edge * config.province_stroke_fraction, 4)
    municipality_stroke = format_number(long_edge * config.municipality_stroke_fraction, 4)

    removed = 0
    for feature in document:
        box = feature.bounds
        if box is None or not has_overlap_2d(bounds, box):
            document.remove(feature)
            removed += 1
            continue

        feature.d = translate_path(feature.d, -bounds.x1, -bounds.y1, config.decimal_places)
        feature.set("stroke-width", municipality_stroke if feature.is_child else province_stroke)

    logger.debug("Cropped: kept %d features, removed %d", len(document), removed)
    return removed


@stage(
    id="S3.01",
    phase=Phase.CROP,
    dependencies=["S2.01"],
    description="Crop to the view box and translate to the origin",
)
def crop_stage(ctx: FormatContext) -> None:
    crop_to_box(ctx.document, ctx.require_bounds(), ctx.config)
