"""Tests for the indexed map document."""

from __future__ import annotations

import pytest

from tcws_map.errors import AssetError
from tcws_map.svg.document import LEVEL_ATTR, FeatureKind, MapDocument
from tcws_map.utils.identifiers import escape_selector


def test_indexes_both_groups(document):
    assert len(document) == 13
    assert document.get("Albay").kind is FeatureKind.PROVINCE
    assert document.get("Albay+Legazpi_City").kind is FeatureKind.MUNICIPALITY
    assert "Cebu+Mandaue_City" in document
    assert "Manila" not in document


def test_canvas(document):
    assert document.width == 10000
    assert document.height == 10000
    assert document.canvas.ratio == 1


def test_dimensions_from_viewbox():
    doc = MapDocument.from_string(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 300 200">'
        '<g id="Provinces"/><g id="Municipalities"/></svg>'
    )
    assert (doc.width, doc.height) == (300, 200)


def test_missing_group_is_asset_error():
    with pytest.raises(AssetError, match="Municipalities"):
        MapDocument.from_string('<svg xmlns="http://www.w3.org/2000/svg"><g id="Provinces"/></svg>')


def test_malformed_xml_is_asset_error():
    with pytest.raises(AssetError):
        MapDocument.from_string("<svg><g>")


def test_missing_file_is_asset_error(tmp_path):
    with pytest.raises(AssetError):
        MapDocument.load(tmp_path / "nope.svg")


def test_load(map_path):
    assert len(MapDocument.load(map_path)) == 13


def test_select_by_escaped_id(document):
    selected = document.select("#" + escape_selector("Cebu+Mandaue_City"))
    assert [f.id for f in selected] == ["Cebu+Mandaue_City"]


def test_select_unknown_id_is_empty(document):
    assert document.select("#Atlantis") == []


def test_select_children_by_attribute(document):
    ids = {f.id for f in document.select('[data-province="Albay"]')}
    assert ids == {"Albay+Legazpi_City", "Albay+Tabaco_City"}
    assert {f.id for f in document.children_of("Cebu")} == {"Cebu+Mandaue_City", "Cebu+Cebu_City"}


def test_unsupported_selector(document):
    with pytest.raises(ValueError):
        document.select("path.province")


def test_feature_bounds(document):
    b = document.get("Albay+Tabaco_City").bounds
    assert (b.x1, b.x2, b.y1, b.y2) == (2500, 3000, 2000, 2500)


def test_bounds_cache_follows_d(document):
    feature = document.get("Albay")
    assert feature.bounds.x1 == 2000
    feature.d = "M 0 0 L 1 1"
    assert feature.bounds.x2 == 1


def test_mark(document):
    feature = document.get("Albay")
    document.mark(feature, 3, "#ffaa00")
    assert feature.fill == "#ffaa00"
    assert feature.level == 3
    assert feature.get(LEVEL_ATTR) == "3"
    assert document.marked() == [feature]
    assert document.select(f"[{LEVEL_ATTR}]") == [feature]


def test_marks_survive_reparse(document):
    document.mark(document.get("Cebu"), 2, "#fff200")
    reparsed = MapDocument.from_string(document.to_bytes())
    assert [f.id for f in reparsed.marked()] == ["Cebu"]


def test_remove(document):
    feature = document.get("Albay+Legazpi_City")
    document.mark(feature, 1, "#00aaff")
    document.remove(feature)
    assert "Albay+Legazpi_City" not in document
    assert document.marked() == []
    assert [f.id for f in document.children_of("Albay")] == ["Albay+Tabaco_City"]
    assert b"Legazpi" not in document.to_bytes()


def test_remove_twice_is_harmless(document):
    feature = document.get("Batanes")
    document.remove(feature)
    document.remove(feature)
    assert len(document) == 12


def test_remove_children_of(document):
    assert document.remove_children_of("Albay") == 2
    assert document.children_of("Albay") == []
    assert document.remove_children_of("Albay") == 0
    assert "Albay" in document


def test_set_canvas_size(document):
    document.set_canvas_size(1600, 900.456)
    assert document.root.get("width") == "1600.00"
    assert document.root.get("viewBox") == "0 0 1600.00 900.46"
    assert document.height == pytest.approx(900.46)


def test_serialization_keeps_default_namespace(document):
    out = document.to_bytes()
    assert out.startswith(b"<?xml")
    assert b"ns0:" not in out
    assert b'xmlns="http://www.w3.org/2000/svg"' in out


def test_iteration_allows_removal(document):
    for feature in document:
        if feature.is_child:
            document.remove(feature)
    assert len(document) == 6
