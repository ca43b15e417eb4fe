"""S4.02: Water background rectangle beneath all map content."""

from __future__ import annotations

from tcws_map.engine.context import FormatContext
from tcws_map.engine.registry import Phase, stage
from tcws_map.svg.document import MapDocument, format_number, local_name

BACKGROUND_ID = "tcws-background"

_NON_RENDERING = {"defs", "metadata", "title", "desc", "style", "namedview"}


def add_background(document: MapDocument, color: str) -> None:
    rect = document.make_element("rect", {
        "id": BACKGROUND_ID,
        "x": "0",
        "y": "0",
        "width": format_number(document.width),
        "height": format_number(document.height),
        "fill": color,
    })
    # First slot after the leading non-rendering elements.
    index = 0
    for el in document.root:
        if local_name(el.tag) not in _NON_RENDERING:
            break
        index += 1
    document.root.insert(index, rect)


@stage(
    id="S4.02",
    phase=Phase.COMPOSITE,
    dependencies=["S4.01"],
    description="Fill the canvas background with water",
)
def background_stage(ctx: FormatContext) -> None:
    add_background(ctx.document, ctx.config.water_color)
