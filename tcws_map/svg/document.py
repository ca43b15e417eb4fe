"""Map document: ElementTree tree plus an indexed feature table.

Every ``<path>`` under the Provinces and Municipalities groups becomes a
Feature keyed by its ``id``. Selection, tagging, bounds lookup and removal go
through the index rather than repeated tree queries.
"""

from __future__ import annotations

import enum
import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from tcws_map.errors import AssetError
from tcws_map.svg import paths
from tcws_map.utils.geometry import Bounds
from tcws_map.utils.identifiers import SEPARATOR, unescape_selector

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

# Namespaces found in the Wikimedia base map. Registered so serialization keeps
# readable prefixes instead of ns0/ns1.
NAMESPACES = {
    "": SVG_NS,
    "xlink": "http://www.w3.org/1999/xlink",
    "inkscape": "http://www.inkscape.org/namespaces/inkscape",
    "sodipodi": "http://sodipodi.sourceforge.net/DTD/sodipodi-0.0.dtd",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "cc": "http://creativecommons.org/ns#",
    "dc": "http://purl.org/dc/elements/1.1/",
}
for _prefix, _uri in NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)

PROVINCES_GROUP = "Provinces"
MUNICIPALITIES_GROUP = "Municipalities"

# Municipality → province back-reference.
PARENT_ATTR = "data-province"
# Signal level that last coloured a feature.
LEVEL_ATTR = "data-tcws-level"

_ID_SELECTOR_RE = re.compile(r"^#(.+)$", re.DOTALL)
_ATTR_SELECTOR_RE = re.compile(r"""^\[([\w:-]+)(?:=(?:"([^"]*)"|'([^']*)'|([^\]]*)))?\]$""")
_LENGTH_RE = re.compile(r"^\s*(-?[\d.]+(?:[eE][-+]?\d+)?)\s*(px)?\s*$")


def svg_tag(name: str) -> str:
    return f"{{{SVG_NS}}}{name}"


def local_name(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def parse_length(value: str | None) -> float | None:
    if value is None:
        return None
    m = _LENGTH_RE.match(value)
    if not m:
        return None
    return float(m.group(1))


def format_number(value: float, places: int = 2) -> str:
    return f"{value:.{places}f}"


class FeatureKind(enum.Enum):
    PROVINCE = "province"
    MUNICIPALITY = "municipality"


@dataclass(eq=False)
class Feature:
    """One map shape: a province or municipality path."""

    id: str
    kind: FeatureKind
    element: ET.Element
    group: ET.Element
    _bounds: Bounds | None = field(default=None, repr=False)
    _bounds_valid: bool = field(default=False, repr=False)

    @property
    def parent_ref(self) -> str | None:
        return self.element.get(PARENT_ATTR)

    @property
    def is_child(self) -> bool:
        return SEPARATOR in self.id

    @property
    def d(self) -> str:
        return self.element.get("d", "")

    @d.setter
    def d(self, value: str) -> None:
        self.element.set("d", value)
        self._bounds_valid = False

    @property
    def bounds(self) -> Bounds | None:
        """Bounding box of the path, cached until ``d`` changes."""
        if not self._bounds_valid:
            self._bounds = paths.bounding_box(self.d)
            self._bounds_valid = True
        return self._bounds

    @property
    def fill(self) -> str | None:
        return self.element.get("fill")

    @property
    def level(self) -> int | None:
        value = self.element.get(LEVEL_ATTR)
        return int(value) if value is not None else None

    def get(self, attr: str, default: str | None = None) -> str | None:
        return self.element.get(attr, default)

    def set(self, attr: str, value: str) -> None:
        self.element.set(attr, value)


class MapDocument:
    """Base map with O(1) feature lookup by identifier and by parent province."""

    def __init__(self, root: ET.Element) -> None:
        if local_name(root.tag) != "svg":
            raise AssetError(f"Map root must be <svg>, got <{local_name(root.tag)}>")
        self.root = root
        self.tree = ET.ElementTree(root)
        self.features: dict[str, Feature] = {}
        self._children: dict[str, dict[str, Feature]] = {}
        self._marked: dict[str, Feature] = {}
        self.groups: dict[str, ET.Element] = {}
        self._index()

    # ── Loading / serialization ───────────────────────────────────────────

    @classmethod
    def from_string(cls, svg_text: str | bytes) -> MapDocument:
        try:
            root = ET.fromstring(svg_text)
        except ET.ParseError as e:
            raise AssetError(f"Map document is not well-formed XML: {e}") from e
        return cls(root)

    @classmethod
    def load(cls, path: str | Path) -> MapDocument:
        path = Path(path)
        try:
            text = path.read_bytes()
        except OSError as e:
            raise AssetError(f"Cannot read map asset {path}: {e}") from e
        doc = cls.from_string(text)
        logger.debug("Loaded map %s: %d features", path.name, len(doc.features))
        return doc

    def to_bytes(self) -> bytes:
        return ET.tostring(self.root, encoding="utf-8", xml_declaration=True)

    def _index(self) -> None:
        for el in self.root.iter():
            if local_name(el.tag) == "g" and el.get("id") in (PROVINCES_GROUP, MUNICIPALITIES_GROUP):
                self.groups[el.get("id")] = el

        missing = {PROVINCES_GROUP, MUNICIPALITIES_GROUP} - self.groups.keys()
        if missing:
            raise AssetError(f"Map document is missing feature groups: {sorted(missing)}")

        for gid, kind in (
            (PROVINCES_GROUP, FeatureKind.PROVINCE),
            (MUNICIPALITIES_GROUP, FeatureKind.MUNICIPALITY),
        ):
            # Paths may sit in nested sub-groups; removal needs the direct parent.
            parents = {child: parent for parent in self.groups[gid].iter() for child in parent}
            for el, parent in parents.items():
                if local_name(el.tag) != "path":
                    continue
                fid = el.get("id")
                if not fid:
                    continue
                feature = Feature(id=fid, kind=kind, element=el, group=parent)
                self.features[fid] = feature
                if kind is FeatureKind.MUNICIPALITY and feature.parent_ref:
                    self._children.setdefault(feature.parent_ref, {})[fid] = feature
                if el.get(LEVEL_ATTR) is not None:
                    self._marked[fid] = feature

    # ── Canvas ────────────────────────────────────────────────────────────

    @property
    def width(self) -> float:
        return self._dimension("width", 2)

    @property
    def height(self) -> float:
        return self._dimension("height", 3)

    def _dimension(self, attr: str, viewbox_index: int) -> float:
        value = parse_length(self.root.get(attr))
        if value is not None:
            return value
        viewbox = self.root.get("viewBox")
        if viewbox:
            parts = viewbox.replace(",", " ").split()
            if len(parts) == 4:
                return float(parts[viewbox_index])
        raise AssetError(f"Map document declares no {attr} or viewBox")

    @property
    def canvas(self) -> Bounds:
        return Bounds(x1=0.0, x2=self.width, y1=0.0, y2=self.height)

    def set_canvas_size(self, width: float, height: float) -> None:
        w = format_number(width)
        h = format_number(height)
        self.root.set("width", w)
        self.root.set("height", h)
        self.root.set("viewBox", f"0 0 {w} {h}")

    def make_element(self, name: str, attrib: dict[str, str] | None = None) -> ET.Element:
        """New element in the same namespace as the document root."""
        tag = svg_tag(name) if self.root.tag.startswith("{") else name
        return ET.Element(tag, attrib or {})

    def find_by_id(self, element_id: str) -> ET.Element | None:
        for el in self.root.iter():
            if el.get("id") == element_id:
                return el
        return None

    # ── Feature table ─────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.features)

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self.features

    def __iter__(self) -> Iterator[Feature]:
        return iter(list(self.features.values()))

    def get(self, feature_id: str) -> Feature | None:
        return self.features.get(feature_id)

    def children_of(self, parent_id: str) -> list[Feature]:
        return list(self._children.get(parent_id, {}).values())

    def select(self, selector: str) -> list[Feature]:
        """Resolve ``#<escaped id>`` or ``[attr="value"]`` against the index.

        Unknown identifiers select nothing.
        """
        selector = selector.strip()
        m = _ID_SELECTOR_RE.match(selector)
        if m:
            feature = self.features.get(unescape_selector(m.group(1)))
            return [feature] if feature is not None else []

        m = _ATTR_SELECTOR_RE.match(selector)
        if m:
            attr = m.group(1)
            value = next((g for g in m.group(2, 3, 4) if g is not None), None)
            if attr == PARENT_ATTR and value is not None:
                return self.children_of(value)
            if attr == LEVEL_ATTR and value is None:
                return self.marked()
            return [
                f for f in self.features.values()
                if f.get(attr) is not None and (value is None or f.get(attr) == value)
            ]

        raise ValueError(f"Unsupported selector: {selector!r}")

    def mark(self, feature: Feature, level: int, color: str) -> None:
        feature.set("fill", color)
        feature.set(LEVEL_ATTR, str(level))
        self._marked[feature.id] = feature

    def marked(self) -> list[Feature]:
        return list(self._marked.values())

    def remove(self, feature: Feature) -> None:
        if self.features.pop(feature.id, None) is None:
            return
        feature.group.remove(feature.element)
        self._marked.pop(feature.id, None)
        parent = feature.parent_ref
        if parent is not None and parent in self._children:
            self._children[parent].pop(feature.id, None)

    def invalidate_geometry(self) -> None:
        """Drop cached feature bounds after the tree was edited directly."""
        for feature in self.features.values():
            feature._bounds_valid = False

    def remove_children_of(self, parent_id: str) -> int:
        children = self.children_of(parent_id)
        for child in children:
            self.remove(child)
        return len(children)
