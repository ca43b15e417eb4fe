"""FormatContext: the single mutable state object flowing through all stages.

Each format call builds its own context from freshly loaded assets; nothing
in here outlives the call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tcws_map.engine.config import FormatterConfig
from tcws_map.models.bulletin import Bulletin
from tcws_map.svg.document import MapDocument
from tcws_map.svg.overlay import OverlayDocument
from tcws_map.utils.geometry import Bounds


@dataclass
class FormatContext:
    """Shared state for one format call."""

    bulletin: Bulletin
    document: MapDocument
    overlay: OverlayDocument | None = None
    config: FormatterConfig = field(default_factory=FormatterConfig)

    # Resolved view box in original map coordinates (set by the bounds stage)
    bounds: Bounds | None = None
    # Uniform factor applied by the rescale stage
    scale_factor: float = 1.0

    # --- Pipeline metadata ---
    completed_stages: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    def require_bounds(self) -> Bounds:
        if self.bounds is None:
            raise RuntimeError("Bounds have not been resolved yet")
        return self.bounds
