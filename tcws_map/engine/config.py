"""Formatter configuration: colours, padding and output framing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_COLORS: dict[int, str] = {
    1: "#00aaff",
    2: "#fff200",
    3: "#ffaa00",
    4: "#ff0000",
    5: "#cd00cd",
}

WATER_COLOR = "#002174"
LAND_COLOR = "#74b474"

DEFAULT_PADDING = 500.0


@dataclass(frozen=True)
class Padding:
    """Per-edge padding around the coloured region, in map units."""

    top: float = DEFAULT_PADDING
    right: float = DEFAULT_PADDING
    bottom: float = DEFAULT_PADDING
    left: float = DEFAULT_PADDING

    @classmethod
    def from_value(cls, value: Padding | Mapping[str, float] | float | None) -> Padding:
        """Expand shorthand padding to four edges.

        Accepts a scalar (all edges), a mapping with ``vertical``/``horizontal``,
        a mapping with explicit edges, or a mix; an explicit edge wins over the
        shorthand for that edge. Missing edges keep the default.
        """
        if value is None:
            return cls()
        if isinstance(value, Padding):
            return value
        if isinstance(value, (int, float)):
            v = float(value)
            return cls(top=v, right=v, bottom=v, left=v)
        if isinstance(value, Mapping):
            unknown = set(value) - {"top", "right", "bottom", "left", "vertical", "horizontal"}
            if unknown:
                raise ValueError(f"Unknown padding keys: {sorted(unknown)}")
            default = cls()
            vertical = value.get("vertical")
            horizontal = value.get("horizontal")

            def edge(name: str, shorthand: float | None) -> float:
                if value.get(name) is not None:
                    return float(value[name])
                if shorthand is not None:
                    return float(shorthand)
                return getattr(default, name)

            return cls(
                top=edge("top", vertical),
                right=edge("right", horizontal),
                bottom=edge("bottom", vertical),
                left=edge("left", horizontal),
            )
        raise TypeError(f"Unsupported padding value: {value!r}")


@dataclass(frozen=True)
class FormatterConfig:
    """Everything a format call needs besides the assets and the bulletin."""

    colors: Mapping[int, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    padding: Padding = field(default_factory=Padding)

    # Output framing
    aspect_ratio: float = 16 / 9
    target_size: float = 1920.0  # long edge, px

    # Stroke width as a fraction of the cropped view's long edge
    province_stroke_fraction: float = 0.001
    municipality_stroke_fraction: float = 0.00025

    water_color: str = WATER_COLOR
    land_color: str = LAND_COLOR

    # Overlay legend opacity for levels absent from the bulletin
    dim_opacity: float = 0.25

    # Coordinate rounding for translated / scaled paths
    decimal_places: int = 2

    def with_overrides(self, **changes: Any) -> FormatterConfig:
        """Copy with fields replaced. ``colors`` merges over the current table."""
        if "colors" in changes and changes["colors"] is not None:
            changes["colors"] = {**self.colors, **{int(k): v for k, v in changes["colors"].items()}}
        if "padding" in changes:
            changes["padding"] = Padding.from_value(changes["padding"])
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
