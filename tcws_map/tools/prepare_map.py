"""
Base map preparation: downloads the municipal boundary map and applies the
one-time transformations the formatter relies on.

Usage:
  python -m tcws_map.tools.prepare_map                 # writes settings.tcws_map_path
  python -m tcws_map.tools.prepare_map -o map.svg      # writes elsewhere
  python -m tcws_map.tools.prepare_map -f              # overwrite an existing map
  python -m tcws_map.tools.prepare_map -i source.svg   # transform a local file instead
"""

from __future__ import annotations

import argparse
import logging
import sys
import xml.etree.ElementTree as ET
from pathlib import Path

import requests

from tcws_map import __version__
from tcws_map.config import settings
from tcws_map.engine.config import LAND_COLOR, WATER_COLOR
from tcws_map.svg.document import (
    MUNICIPALITIES_GROUP,
    PARENT_ATTR,
    PROVINCES_GROUP,
    local_name,
)
from tcws_map.utils.identifiers import parent_of

logger = logging.getLogger(__name__)

USER_AGENT = f"tcws-map/{__version__} (+https://github.com/pagasa-parser) requests/{requests.__version__}"
TRANSPARENT = "rgba(0, 0, 0, 0)"


def download_map(url: str, timeout: float = 120.0) -> bytes:
    """Fetch the source map. Raises requests.HTTPError on a non-2xx response."""
    logger.info("Downloading map from %s", url)
    response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    response.raise_for_status()
    logger.info("Downloaded %.1f KB", len(response.content) / 1000)
    return response.content


def _group(root: ET.Element, group_id: str) -> ET.Element:
    for el in root.iter():
        if local_name(el.tag) == "g" and el.get("id") == group_id:
            return el
    raise ValueError(f"Source map has no <g id={group_id!r}>")


def _paths(group: ET.Element):
    return [el for el in group.iter() if local_name(el.tag) == "path"]


def _append_style(el: ET.Element, declaration: str) -> None:
    style = el.get("style")
    el.set("style", declaration if not style else f"{style.rstrip('; ')}; {declaration}")


def prepare_map(svg_text: str | bytes) -> bytes:
    """Apply the formatter's preprocessing to a raw source map.

    - water-coloured background on the root
    - provinces transparent and click-through, drawn above municipalities
    - municipalities filled with the land colour and tagged with their province
    """
    root = ET.fromstring(svg_text)
    _append_style(root, f"background-color: {WATER_COLOR}")

    provinces = _group(root, PROVINCES_GROUP)
    for path in _paths(provinces):
        path.set("fill", TRANSPARENT)
        _append_style(path, "pointer-events: none")

    municipalities = _group(root, MUNICIPALITIES_GROUP)
    tagged = 0
    for path in _paths(municipalities):
        path.set("fill", LAND_COLOR)
        province = parent_of(path.get("id", ""))
        if province:
            path.set(PARENT_ATTR, province)
            tagged += 1

    # Province borders are drawn over municipalities.
    parent = next(p for p in root.iter() if provinces in list(p))
    parent.remove(provinces)
    siblings = list(parent)
    index = siblings.index(municipalities) + 1 if municipalities in siblings else len(siblings)
    parent.insert(index, provinces)

    logger.info(
        "Prepared map: %d provinces, %d municipalities (%d tagged)",
        len(_paths(provinces)),
        len(_paths(municipalities)),
        tagged,
    )
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Download and prepare the signal map base map")
    parser.add_argument("-o", "--output", type=Path, default=settings.tcws_map_path, help="Output SVG path")
    parser.add_argument("-i", "--input", type=Path, help="Transform a local source SVG instead of downloading")
    parser.add_argument("-f", "--force", action="store_true", help="Overwrite an existing map")
    parser.add_argument("--url", default=settings.tcws_map_source_url, help="Source map URL")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    logger.info("Path: %s", args.output)

    if args.output.exists():
        if not args.force:
            logger.info("Map exists. Skipping (use --force to overwrite).")
            return 0
        logger.info("Removing existing map...")
        args.output.unlink()

    try:
        source = args.input.read_bytes() if args.input else download_map(args.url)
    except (OSError, requests.RequestException) as e:
        logger.error("Could not obtain source map: %s", e)
        return 1

    try:
        prepared = prepare_map(source)
    except (ET.ParseError, ValueError) as e:
        logger.error("Source map is unusable: %s", e)
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(prepared)
    logger.info("Map saved as %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
