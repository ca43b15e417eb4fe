"""S1.01: Area colouring.

Tags every map feature named by the bulletin with its signal colour and a
``data-tcws-level`` marker. Levels are processed lowest first so that an area
listed under several levels ends up with the highest one (last write wins).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from tcws_map.engine.context import FormatContext
from tcws_map.engine.registry import Phase, stage
from tcws_map.models.bulletin import (
    Area,
    Bulletin,
    MainlandArea,
    PartArea,
    RestArea,
    WholeArea,
)
from tcws_map.svg.document import PARENT_ATTR, Feature, MapDocument
from tcws_map.utils.identifiers import area_id, escape_selector

logger = logging.getLogger(__name__)


def _by_id(document: MapDocument, feature_id: str) -> list[Feature]:
    return document.select(f"#{escape_selector(feature_id)}")


def _children(document: MapDocument, parent_id: str) -> list[Feature]:
    return document.select(f'[{PARENT_ATTR}="{parent_id}"]')


def select_area(document: MapDocument, area: Area) -> list[Feature]:
    """Features an area reference covers. Whole-area matches drop their municipalities."""
    if isinstance(area, (WholeArea, MainlandArea)):
        pid = area_id(area.name)
        selected = _by_id(document, pid)
        if area.name.endswith("Island"):
            # Island groups are drawn as a single "…Islands" shape.
            selected += _by_id(document, pid + "s")
        for feature in selected:
            removed = document.remove_children_of(feature.id)
            if removed:
                logger.debug("Dropped %d municipalities under %s", removed, feature.id)
        return selected

    if isinstance(area, PartArea) and area.includes is not None:
        selected = []
        for part in area.includes:
            selected += _by_id(document, area_id(part, area.name))
        return selected

    if isinstance(area, (PartArea, RestArea)):
        return _children(document, area_id(area.name))

    raise TypeError(f"Unsupported area reference: {area!r}")


def process_area(
    document: MapDocument,
    level: int,
    area: Area,
    colors: Mapping[int, str],
) -> int:
    """Colour the features of one area reference. Returns how many were coloured."""
    selected = select_area(document, area)
    if not selected:
        logger.debug("No map features for %s area %r", area.kind.value, area.name)
    for feature in selected:
        document.mark(feature, level, colors[level])
    return len(selected)


def color_areas(document: MapDocument, bulletin: Bulletin, colors: Mapping[int, str]) -> int:
    total = 0
    for level in bulletin.levels():
        for area in bulletin.signals[level].all_areas():
            total += process_area(document, level, area, colors)
    return total


@stage(id="S1.01", phase=Phase.COLORING, description="Colour bulletin areas by signal level")
def colour_stage(ctx: FormatContext) -> None:
    total = color_areas(ctx.document, ctx.bulletin, ctx.config.colors)
    logger.info("Coloured %d features across levels %s", total, ctx.bulletin.levels())
