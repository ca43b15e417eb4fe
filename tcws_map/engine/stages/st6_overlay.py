"""S6.01: Bulletin overlay text and legend."""

from __future__ import annotations

import logging
import re

from tcws_map.engine.context import FormatContext
from tcws_map.engine.registry import Phase, stage
from tcws_map.models.bulletin import Bulletin, Cyclone
from tcws_map.svg.document import MapDocument
from tcws_map.svg.overlay import COUNT_ID, ISSUED_ID, NAME_ID, OVERLAY_ID, OverlayDocument
from tcws_map.utils.timefmt import format_issued

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def cyclone_title(cyclone: Cyclone) -> str:
    """``Typhoon Gaemi (Carina)`` when everything is known, else the one name there is."""
    local = (cyclone.name or "").strip()
    international = (cyclone.international_name or "").strip()

    if local and international and cyclone.category is not None:
        title = f"{cyclone.category.label} {international} ({local})"
    else:
        title = local or international

    return _WHITESPACE_RE.sub(" ", title).strip().title()


def populate_overlay(overlay: OverlayDocument, bulletin: Bulletin, dim_opacity: float) -> None:
    overlay.set_text(NAME_ID, cyclone_title(bulletin.cyclone))
    overlay.set_text(COUNT_ID, str(bulletin.info.count))
    overlay.set_text(ISSUED_ID, format_issued(bulletin.info.issued))
    for level in overlay.levels:
        overlay.set_level_opacity(level, 1 if bulletin.has_level(level) else dim_opacity)


def attach_overlay(document: MapDocument, overlay: OverlayDocument) -> None:
    """Scale the overlay to the canvas width and append it as a nested <svg>."""
    overlay.scale_to_width(document.width)
    root = overlay.root
    root.set("id", OVERLAY_ID)
    root.set("x", "0")
    root.set("y", "0")
    document.root.append(root)


@stage(
    id="S6.01",
    phase=Phase.OVERLAY,
    dependencies=["S5.01"],
    description="Fill in and attach the bulletin overlay",
)
def overlay_stage(ctx: FormatContext) -> None:
    if ctx.overlay is None:
        logger.debug("No overlay template; skipping")
        return
    populate_overlay(ctx.overlay, ctx.bulletin, ctx.config.dim_opacity)
    attach_overlay(ctx.document, ctx.overlay)
