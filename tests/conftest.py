"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from tcws_map.engine.config import DEFAULT_COLORS
from tcws_map.models.bulletin import Bulletin
from tcws_map.svg.document import MapDocument


# A small prepared base map: 10000×10000, two feature groups, municipalities
# tagged with their province. Albay and Sorsogon are neighbours; Cebu sits far
# to the south-east; Batanes in the north-east corner.
MAP_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="10000" height="10000" viewBox="0 0 10000 10000">
  <g id="Municipalities">
    <path id="Albay+Legazpi_City" data-province="Albay" fill="#74b474" d="M 2000 2000 L 2500 2000 L 2500 2500 L 2000 2500 Z"/>
    <path id="Albay+Tabaco_City" data-province="Albay" fill="#74b474" d="m 2500 2000 l 500 0 l 0 500 l -500 0 z"/>
    <path id="Sorsogon+Bulan" data-province="Sorsogon" fill="#74b474" d="M 3000 3000 L 3400 3000 L 3400 3400 Z"/>
    <path id="Cebu+Mandaue_City" data-province="Cebu" fill="#74b474" d="M 6000 6000 H 6400 V 6400 H 6000 Z"/>
    <path id="Cebu+Cebu_City" data-province="Cebu" fill="#74b474" d="M 6400 6000 H 6800 V 6400 H 6400 Z"/>
    <path id="Batanes+Basco" data-province="Batanes" fill="#74b474" d="M 9000 200 L 9400 200 L 9400 600 Z"/>
    <path id="Davao_de_Oro+Maco" data-province="Davao_de_Oro" fill="#74b474" d="M 7000 9000 L 7300 9000 L 7300 9300 Z"/>
  </g>
  <g id="Provinces">
    <path id="Albay" fill="rgba(0, 0, 0, 0)" d="M 2000 2000 L 3000 2000 L 3000 2500 L 2000 2500 Z"/>
    <path id="Sorsogon" fill="rgba(0, 0, 0, 0)" d="M 3000 3000 L 3400 3000 L 3400 3400 Z"/>
    <path id="Cebu" fill="rgba(0, 0, 0, 0)" d="M 6000 6000 L 6800 6000 L 6800 6400 L 6000 6400 Z"/>
    <path id="Batanes" fill="rgba(0, 0, 0, 0)" d="M 9000 200 L 9400 200 L 9400 600 Z"/>
    <path id="Davao_de_Oro" fill="rgba(0, 0, 0, 0)" d="M 7000 9000 L 7300 9000 L 7300 9300 Z"/>
    <path id="Dinagat_Islands" fill="rgba(0, 0, 0, 0)" d="M 8000 8000 c 100 0 200 100 200 200 s -100 200 -200 200 z"/>
  </g>
</svg>'''

# Raw source map as downloaded, before preparation.
SOURCE_MAP_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
  <g id="Provinces">
    <path id="Albay" d="M 10 10 L 20 10 L 20 20 Z"/>
  </g>
  <g id="Municipalities">
    <path id="Albay+Legazpi_City" d="M 10 10 L 15 10 L 15 15 Z"/>
    <path id="Albay+Tabaco_City" d="M 15 10 L 20 10 L 20 15 Z"/>
  </g>
</svg>'''

ISSUED = datetime(2024, 7, 15, 12, 30, tzinfo=timezone.utc)


def make_bulletin(signals: dict | None = None, **cyclone) -> Bulletin:
    """Bulletin with ``signals`` given as {level: [area dicts]} (all under luzon)."""
    return Bulletin.model_validate({
        "info": {"title": "Tropical Cyclone Bulletin", "count": 7, "issued": ISSUED},
        "cyclone": cyclone or {"name": "Carina", "internationalName": "Gaemi", "category": "TY"},
        "signals": {
            level: ({"areas": {"luzon": areas}} if areas is not None else None)
            for level, areas in (signals or {}).items()
        },
    })


@pytest.fixture
def map_svg() -> str:
    return MAP_SVG


@pytest.fixture
def document() -> MapDocument:
    return MapDocument.from_string(MAP_SVG)


@pytest.fixture
def colors() -> dict[int, str]:
    return dict(DEFAULT_COLORS)


@pytest.fixture
def map_path(tmp_path: Path) -> Path:
    path = tmp_path / "map.svg"
    path.write_text(MAP_SVG, encoding="utf-8")
    return path
