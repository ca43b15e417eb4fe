"""S4.01: Canvas clip mask on both feature groups."""

from __future__ import annotations

from tcws_map.engine.context import FormatContext
from tcws_map.engine.registry import Phase, stage
from tcws_map.svg.document import MapDocument, format_number, local_name

CLIP_ID = "tcws-canvas-clip"


def add_clip_mask(document: MapDocument) -> None:
    """Clip the Provinces and Municipalities groups to the current canvas."""
    defs = next((el for el in document.root if local_name(el.tag) == "defs"), None)
    if defs is None:
        defs = document.make_element("defs")
        document.root.insert(0, defs)

    clip = document.make_element("clipPath", {"id": CLIP_ID})
    clip.append(document.make_element("rect", {
        "x": "0",
        "y": "0",
        "width": format_number(document.width),
        "height": format_number(document.height),
    }))
    defs.append(clip)

    for group in document.groups.values():
        group.set("clip-path", f"url(#{CLIP_ID})")


@stage(
    id="S4.01",
    phase=Phase.COMPOSITE,
    dependencies=["S3.01"],
    description="Clip feature groups to the canvas",
)
def clip_stage(ctx: FormatContext) -> None:
    add_clip_mask(ctx.document)
