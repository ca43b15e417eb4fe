"""Bulletin data model: the structured input to a format call."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SIGNAL_LEVELS = range(1, 6)


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class AreaKind(str, enum.Enum):
    WHOLE = "whole"
    MAINLAND = "mainland"
    PART = "part"
    REST = "rest"


class WholeArea(_Model):
    kind: Literal[AreaKind.WHOLE] = AreaKind.WHOLE
    name: str


class MainlandArea(_Model):
    kind: Literal[AreaKind.MAINLAND] = AreaKind.MAINLAND
    name: str


class PartArea(_Model):
    """Named sub-areas of a province. ``includes=None`` means unspecified."""

    kind: Literal[AreaKind.PART] = AreaKind.PART
    name: str
    includes: list[str] | None = None


class RestArea(_Model):
    """Province minus the sub-areas already listed under another level."""

    kind: Literal[AreaKind.REST] = AreaKind.REST
    name: str
    includes: list[str] | None = None


Area = Annotated[
    Union[WholeArea, MainlandArea, PartArea, RestArea],
    Field(discriminator="kind"),
]


class CycloneCategory(str, enum.Enum):
    TD = "TD"
    TS = "TS"
    STS = "STS"
    TY = "TY"
    STY = "STY"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    CycloneCategory.TD: "Tropical Depression",
    CycloneCategory.TS: "Tropical Storm",
    CycloneCategory.STS: "Severe Tropical Storm",
    CycloneCategory.TY: "Typhoon",
    CycloneCategory.STY: "Super Typhoon",
}


class Cyclone(_Model):
    name: str | None = None
    international_name: str | None = Field(default=None, alias="internationalName")
    category: CycloneCategory | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _category_from_label(cls, value: Any) -> Any:
        if isinstance(value, str):
            for category, label in _CATEGORY_LABELS.items():
                if value.strip().lower() == label.lower():
                    return category
            return value.strip().upper()
        return value


class BulletinInfo(_Model):
    title: str = ""
    count: int
    issued: datetime


class SignalLevel(_Model):
    """Areas under one signal level, grouped by region (luzon, visayas, …)."""

    areas: dict[str, list[Area]] = Field(default_factory=dict)

    def all_areas(self) -> Iterator[Area]:
        for areas in self.areas.values():
            yield from areas


class Bulletin(_Model):
    info: BulletinInfo
    cyclone: Cyclone = Field(default_factory=Cyclone)
    signals: dict[int, SignalLevel | None] = Field(default_factory=dict)

    @field_validator("signals")
    @classmethod
    def _levels_in_range(cls, value: dict[int, SignalLevel | None]) -> dict[int, SignalLevel | None]:
        bad = [level for level in value if level not in SIGNAL_LEVELS]
        if bad:
            raise ValueError(f"Signal levels must be within 1-5, got {bad}")
        return value

    def levels(self) -> list[int]:
        """Levels carrying data, lowest first."""
        return sorted(level for level, data in self.signals.items() if data is not None)

    def has_level(self, level: int) -> bool:
        return self.signals.get(level) is not None

    @classmethod
    def from_pagasa_parser(cls, data: dict[str, Any]) -> Bulletin:
        """Build a Bulletin from pagasa-parser's JSON output.

        pagasa-parser marks partial areas with ``part: true`` and describes
        the portion in ``includes: {type, objects}``.
        """
        signals: dict[int, Any] = {}
        for level, level_data in (data.get("signals") or {}).items():
            if level_data is None:
                signals[int(level)] = None
                continue
            signals[int(level)] = {
                "areas": {
                    region: [_area_from_pagasa(a) for a in areas]
                    for region, areas in (level_data.get("areas") or {}).items()
                }
            }

        return cls.model_validate({
            "info": data["info"],
            "cyclone": data.get("cyclone") or {},
            "signals": signals,
        })


def _area_from_pagasa(area: dict[str, Any]) -> dict[str, Any]:
    name = area["name"]
    if not area.get("part"):
        return {"kind": AreaKind.WHOLE, "name": name}

    includes = area.get("includes") or {}
    kind = {
        "mainland": AreaKind.MAINLAND,
        "section": AreaKind.PART,
        "rest": AreaKind.REST,
    }.get(includes.get("type"), AreaKind.PART)

    if kind is AreaKind.MAINLAND:
        return {"kind": kind, "name": name}
    return {"kind": kind, "name": name, "includes": includes.get("objects")}
