"""Overlay template: bulletin metadata text and per-level legend groups."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from tcws_map.errors import AssetError
from tcws_map.svg.document import local_name, parse_length
from tcws_map.svg.scale import scale_tree

logger = logging.getLogger(__name__)

NAME_ID = "cyclone-name"
COUNT_ID = "bulletin-count"
ISSUED_ID = "bulletin-issued"
LEVEL_GROUP_PREFIX = "signal-"
OVERLAY_ID = "tcws-overlay"

_WHITESPACE_RE = re.compile(r"\s+")


class OverlayDocument:
    """Template with named text placeholders and opacity-controlled level groups."""

    def __init__(self, root: ET.Element, levels: range = range(1, 6)) -> None:
        if local_name(root.tag) != "svg":
            raise AssetError(f"Overlay root must be <svg>, got <{local_name(root.tag)}>")
        self.root = root
        self._by_id = {el.get("id"): el for el in root.iter() if el.get("id")}

        required = [NAME_ID, COUNT_ID, ISSUED_ID] + [f"{LEVEL_GROUP_PREFIX}{n}" for n in levels]
        missing = [eid for eid in required if eid not in self._by_id]
        if missing:
            raise AssetError(f"Overlay template is missing elements: {missing}")
        self.levels = levels

    @classmethod
    def from_string(cls, svg_text: str | bytes) -> OverlayDocument:
        try:
            return cls(ET.fromstring(svg_text))
        except ET.ParseError as e:
            raise AssetError(f"Overlay template is not well-formed XML: {e}") from e

    @classmethod
    def load(cls, path: str | Path) -> OverlayDocument:
        path = Path(path)
        try:
            text = path.read_bytes()
        except OSError as e:
            raise AssetError(f"Cannot read overlay asset {path}: {e}") from e
        return cls.from_string(text)

    @property
    def width(self) -> float:
        value = parse_length(self.root.get("width"))
        if value is None:
            raise AssetError("Overlay template declares no numeric width")
        return value

    def element(self, element_id: str) -> ET.Element:
        return self._by_id[element_id]

    def set_text(self, element_id: str, text: str) -> None:
        el = self._by_id[element_id]
        # Text may sit in a <tspan>; write to the innermost first child.
        while len(el) > 0:
            el = el[0]
        el.text = _WHITESPACE_RE.sub(" ", text).strip()

    def set_level_opacity(self, level: int, opacity: float) -> None:
        self._by_id[f"{LEVEL_GROUP_PREFIX}{level}"].set("opacity", f"{opacity:g}")

    def scale_to_width(self, width: float) -> None:
        native = self.width
        if abs(native - width) < 1e-9:
            return
        scale_tree(self.root, width / native)
        logger.debug("Scaled overlay from %.0f to %.0f px", native, width)
