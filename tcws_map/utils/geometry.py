"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tcws_map.engine.config import Padding


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box in document coordinates."""

    x1: float
    x2: float
    y1: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    @property
    def center(self) -> tuple[float, float]:
        return ((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)

    @property
    def ratio(self) -> float:
        if self.height == 0:
            return math.inf if self.width > 0 else math.nan
        return self.width / self.height

    def padded(self, padding: Padding) -> Bounds:
        return Bounds(
            x1=self.x1 - padding.left,
            x2=self.x2 + padding.right,
            y1=self.y1 - padding.top,
            y2=self.y2 + padding.bottom,
        )

    def expanded(self, dx: float, dy: float) -> Bounds:
        """Grow by dx/dy total, split evenly on both sides."""
        return Bounds(
            x1=self.x1 - dx / 2,
            x2=self.x2 + dx / 2,
            y1=self.y1 - dy / 2,
            y2=self.y2 + dy / 2,
        )

    def union(self, other: Bounds) -> Bounds:
        return Bounds(
            x1=min(self.x1, other.x1),
            x2=max(self.x2, other.x2),
            y1=min(self.y1, other.y1),
            y2=max(self.y2, other.y2),
        )


def has_overlap_1d(min1: float, max1: float, min2: float, max2: float) -> bool:
    """True when [min1, max1] and [min2, max2] share at least one point."""
    return max1 >= min2 and max2 >= min1


def has_overlap_2d(box1: Bounds, box2: Bounds) -> bool:
    return has_overlap_1d(box1.x1, box1.x2, box2.x1, box2.x2) and has_overlap_1d(
        box1.y1, box1.y2, box2.y1, box2.y2
    )


def aspect_ratio_delta(ratio: float, box: Bounds) -> tuple[float, float]:
    """Return (dx, dy) that must be added to the box to reach ``ratio``.

    Only one of the two is ever non-zero and neither is negative: the box is
    grown on its deficient axis, never shrunk.
    """
    if ratio <= 0:
        raise ValueError(f"Aspect ratio must be positive, got {ratio}")

    width = box.width
    height = box.height
    if width <= 0 and height <= 0:
        raise ValueError(f"Cannot resize an empty box: {box}")

    current = box.ratio

    if ratio >= 1:
        # Landscape target.
        if current < ratio:
            return (height * ratio - width, 0.0)
        return (0.0, width / ratio - height)

    # Portrait target.
    if current > ratio:
        return (0.0, width / ratio - height)
    return (height * ratio - width, 0.0)


def resize_to_aspect_ratio(ratio: float, box: Bounds) -> Bounds:
    """Expand ``box`` about its centre until width / height == ratio."""
    dx, dy = aspect_ratio_delta(ratio, box)
    return box.expanded(dx, dy)
