"""Tests for area colouring."""

from __future__ import annotations

import pytest

from tcws_map.engine.stages.st1_color_areas import color_areas, process_area, select_area
from tcws_map.models.bulletin import MainlandArea, PartArea, RestArea, WholeArea
from tcws_map.svg.document import PARENT_ATTR, MapDocument
from tests.conftest import make_bulletin


def _ids(features):
    return sorted(f.id for f in features)


def test_whole_province(document, colors):
    assert process_area(document, 3, WholeArea(name="Albay"), colors) == 1
    albay = document.get("Albay")
    assert albay.fill == colors[3]
    assert albay.level == 3
    # Municipalities under a fully covered province are dropped.
    assert document.children_of("Albay") == []
    assert "Albay+Legazpi_City" not in document
    assert f'{PARENT_ATTR}="Albay"'.encode() not in document.to_bytes()


def test_mainland_behaves_like_whole(document, colors):
    assert _ids(select_area(document, MainlandArea(name="Cebu"))) == ["Cebu"]
    assert document.children_of("Cebu") == []


def test_island_matches_island_group(document):
    assert _ids(select_area(document, WholeArea(name="Dinagat Island"))) == ["Dinagat_Islands"]


def test_part_with_includes(document, colors):
    area = PartArea(name="Cebu", includes=["Mandaue City"])
    assert process_area(document, 1, area, colors) == 1
    assert document.get("Cebu+Mandaue_City").fill == colors[1]
    assert document.get("Cebu+Cebu_City").fill == "#74b474"
    assert document.get("Cebu").level is None


def test_part_with_city_of_name(document):
    area = PartArea(name="Cebu", includes=["City of Mandaue"])
    assert _ids(select_area(document, area)) == ["Cebu+Mandaue_City"]


def test_part_with_legacy_province_name(document):
    area = PartArea(name="Compostela Valley", includes=["Maco"])
    assert _ids(select_area(document, area)) == ["Davao_de_Oro+Maco"]


@pytest.mark.parametrize("area", [PartArea(name="Cebu"), RestArea(name="Cebu", includes=["Mandaue City"])])
def test_unspecified_part_and_rest_cover_all_children(document, area):
    assert _ids(select_area(document, area)) == ["Cebu+Cebu_City", "Cebu+Mandaue_City"]


def test_unmatched_names_are_skipped(document, colors):
    assert process_area(document, 2, WholeArea(name="Atlantis"), colors) == 0
    assert process_area(document, 2, PartArea(name="Cebu", includes=["Nowhere"]), colors) == 0
    assert document.marked() == []


def test_highest_level_wins(document, colors):
    bulletin = make_bulletin({
        2: [{"kind": "whole", "name": "Sorsogon"}],
        1: [{"kind": "whole", "name": "Sorsogon"}, {"kind": "whole", "name": "Albay"}],
    })
    color_areas(document, bulletin, colors)
    assert document.get("Sorsogon").fill == colors[2]
    assert document.get("Albay").fill == colors[1]


def test_rest_then_higher_part(document, colors):
    bulletin = make_bulletin({
        1: [{"kind": "rest", "name": "Cebu"}],
        3: [{"kind": "part", "name": "Cebu", "includes": ["Mandaue City"]}],
    })
    assert color_areas(document, bulletin, colors) == 3
    assert document.get("Cebu+Mandaue_City").level == 3
    assert document.get("Cebu+Cebu_City").level == 1


def test_colouring_is_idempotent(document, colors):
    bulletin = make_bulletin({
        1: [{"kind": "part", "name": "Cebu", "includes": ["Mandaue City"]}],
        4: [{"kind": "whole", "name": "Albay"}],
    })
    color_areas(document, bulletin, colors)
    once = document.to_bytes()
    color_areas(document, bulletin, colors)
    assert document.to_bytes() == once


def test_null_levels_are_ignored(document, colors):
    bulletin = make_bulletin({1: [{"kind": "whole", "name": "Albay"}], 2: None})
    assert color_areas(document, bulletin, colors) == 1


@pytest.mark.parametrize(
    "area, expected",
    [
        (WholeArea(name="Compostela Valley"), ["Davao_de_Oro"]),
        (MainlandArea(name="Compostela Valley"), ["Davao_de_Oro"]),
        (RestArea(name="Compostela Valley"), ["Davao_de_Oro+Maco"]),
        (PartArea(name="Compostela Valley"), ["Davao_de_Oro+Maco"]),
    ],
)
def test_legacy_province_name_everywhere(document, area, expected):
    assert _ids(select_area(document, area)) == expected


def test_application_order_decides_fill(map_svg, colors):
    sorsogon = WholeArea(name="Sorsogon")

    ascending = MapDocument.from_string(map_svg)
    process_area(ascending, 1, sorsogon, colors)
    process_area(ascending, 2, sorsogon, colors)

    descending = MapDocument.from_string(map_svg)
    process_area(descending, 2, sorsogon, colors)
    process_area(descending, 1, sorsogon, colors)

    assert ascending.get("Sorsogon").fill == colors[2]
    assert descending.get("Sorsogon").fill == colors[1]
    assert ascending.to_bytes() != descending.to_bytes()
