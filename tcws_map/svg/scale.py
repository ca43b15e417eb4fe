"""Uniform scaling of a whole SVG element tree."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

from tcws_map.svg.document import format_number, local_name, parse_length
from tcws_map.svg.paths import scale_path

logger = logging.getLogger(__name__)

# Attributes holding a single length in user units.
GEOMETRY_ATTRS = (
    "x", "y", "width", "height",
    "rx", "ry", "cx", "cy", "r",
    "x1", "y1", "x2", "y2",
    "stroke-width", "font-size",
)

_VIEWBOX_SPLIT_RE = re.compile(r"[\s,]+")


def scale_tree(root: ET.Element, factor: float, places: int = 2) -> None:
    """Multiply every coordinate, size and stroke width under ``root`` by ``factor``.

    The root's own width/height/viewBox are scaled too, so the result is a
    proportionally larger (or smaller) copy of the same picture.
    """
    if factor <= 0:
        raise ValueError(f"Scale factor must be positive, got {factor}")

    count = 0
    for el in root.iter():
        if local_name(el.tag) == "path" and el.get("d"):
            el.set("d", scale_path(el.get("d"), factor, places))
            count += 1
        for attr in GEOMETRY_ATTRS:
            value = parse_length(el.get(attr))
            if value is not None:
                el.set(attr, format_number(value * factor, places))
        viewbox = el.get("viewBox")
        if viewbox:
            parts = [float(p) for p in _VIEWBOX_SPLIT_RE.split(viewbox.strip())]
            el.set("viewBox", " ".join(format_number(p * factor, places) for p in parts))

    logger.debug("Scaled tree by %.4f (%d paths)", factor, count)
