"""S2.01: Bounding box resolution.

Folds the boxes of every coloured feature, pads them, and grows the result
to the output aspect ratio. The box is not clamped to the canvas; the crop
stage trims whatever falls outside.
"""

from __future__ import annotations

import logging

import numpy as np

from tcws_map.engine.config import Padding
from tcws_map.engine.context import FormatContext
from tcws_map.engine.registry import Phase, stage
from tcws_map.svg.document import MapDocument
from tcws_map.utils.geometry import Bounds, resize_to_aspect_ratio

logger = logging.getLogger(__name__)


def marked_bounds(document: MapDocument) -> Bounds | None:
    """Union of the boxes of all level-tagged features, or None if there are none."""
    boxes = [f.bounds for f in document.marked()]
    boxes = [b for b in boxes if b is not None]
    if not boxes:
        return None
    arr = np.array([(b.x1, b.x2, b.y1, b.y2) for b in boxes], dtype=np.float64)
    return Bounds(
        x1=float(np.min(arr[:, 0])),
        x2=float(np.max(arr[:, 1])),
        y1=float(np.min(arr[:, 2])),
        y2=float(np.max(arr[:, 3])),
    )


def resolve_bounds(
    document: MapDocument,
    padding: Padding | dict | float | None = None,
    ratio: float = 16 / 9,
) -> Bounds:
    """View box for the coloured region, padded and expanded to ``ratio``.

    A document with nothing coloured resolves to the whole canvas (unpadded),
    expanded to the same ratio.
    """
    box = marked_bounds(document)
    if box is None:
        logger.warning("No coloured features; falling back to the full canvas")
        box = document.canvas
    else:
        box = box.padded(Padding.from_value(padding))

    resized = resize_to_aspect_ratio(ratio, box)
    logger.debug("Resolved bounds %s -> %s", box, resized)
    return resized


@stage(
    id="S2.01",
    phase=Phase.BOUNDS,
    dependencies=["S1.01"],
    description="Resolve the padded, aspect-corrected view box",
)
def bounds_stage(ctx: FormatContext) -> None:
    ctx.bounds = resolve_bounds(ctx.document, ctx.config.padding, ctx.config.aspect_ratio)
    logger.info(
        "View box %.0f×%.0f at (%.0f, %.0f)",
        ctx.bounds.width,
        ctx.bounds.height,
        ctx.bounds.x1,
        ctx.bounds.y1,
    )
