"""Exception hierarchy raised by the signal map formatter."""

from __future__ import annotations


class FormatterError(Exception):
    """Base class for every failure surfaced by ``SignalsFormatter.format``."""


class AssetError(FormatterError):
    """A static asset (base map or overlay template) is missing or unusable."""


class PathParseError(FormatterError, ValueError):
    """A path ``d`` attribute could not be parsed."""

    def __init__(self, d: str, reason: str) -> None:
        preview = d if len(d) <= 60 else d[:57] + "..."
        super().__init__(f"Invalid path data {preview!r}: {reason}")
        self.d = d
        self.reason = reason


class StageError(FormatterError):
    """A pipeline stage failed. The original exception is chained as ``__cause__``."""

    def __init__(self, stage_id: str, message: str) -> None:
        super().__init__(f"{stage_id}: {message}")
        self.stage_id = stage_id
