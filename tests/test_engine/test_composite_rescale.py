"""Tests for clip mask, background and rescale stages."""

from __future__ import annotations

import pytest

from tcws_map.engine.stages.st3_crop import crop_to_box
from tcws_map.engine.stages.st4_background import BACKGROUND_ID, add_background
from tcws_map.engine.stages.st4_clip_mask import CLIP_ID, add_clip_mask
from tcws_map.engine.stages.st5_rescale import rescale, rescale_factor
from tcws_map.svg.document import local_name
from tcws_map.utils.geometry import Bounds


def test_clip_mask(document):
    add_clip_mask(document)
    defs = document.root[0]
    assert local_name(defs.tag) == "defs"
    clip = document.find_by_id(CLIP_ID)
    assert local_name(clip.tag) == "clipPath"
    rect = clip[0]
    assert (rect.get("width"), rect.get("height")) == ("10000.00", "10000.00")
    for group in document.groups.values():
        assert group.get("clip-path") == f"url(#{CLIP_ID})"


def test_clip_mask_reuses_defs(document):
    defs = document.make_element("defs")
    document.root.insert(0, defs)
    add_clip_mask(document)
    assert sum(local_name(el.tag) == "defs" for el in document.root) == 1
    assert len(defs) == 1


def test_background_goes_below_features(document):
    add_clip_mask(document)
    add_background(document, "#002174")
    tags = [local_name(el.tag) for el in document.root]
    assert tags[:2] == ["defs", "rect"]
    rect = document.root[1]
    assert rect.get("id") == BACKGROUND_ID
    assert rect.get("fill") == "#002174"
    assert rect.get("width") == "10000.00"


def test_background_without_defs(document):
    add_background(document, "#000000")
    assert document.root[0].get("id") == BACKGROUND_ID


@pytest.mark.parametrize(
    "width, height, expected",
    [(1600, 900, 1.2), (900, 1600, 1.2), (1000, 1000, 1.92), (3840, 2160, 0.5)],
)
def test_rescale_factor_uses_long_edge(width, height, expected):
    assert rescale_factor(width, height, 1920) == pytest.approx(expected)


def test_rescale_document(document):
    crop_to_box(document, Bounds(2000, 4000, 2000, 3125))
    factor = rescale(document, 1920)
    assert factor == pytest.approx(0.96)
    assert document.width == 1920
    assert document.height == pytest.approx(1080)
    # Cached bounds follow the scaled geometry.
    b = document.get("Albay").bounds
    assert (b.x1, b.x2) == pytest.approx((0, 960))
    assert float(document.get("Albay").get("stroke-width")) == pytest.approx(1.92)
