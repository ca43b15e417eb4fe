"""SignalsFormatter: turns a bulletin into a finished signal map SVG."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from tcws_map.config import settings
from tcws_map.engine.config import FormatterConfig
from tcws_map.engine.context import FormatContext
from tcws_map.engine.pipeline import Pipeline, create_pipeline
from tcws_map.models.bulletin import Bulletin
from tcws_map.svg.document import MapDocument
from tcws_map.svg.overlay import OverlayDocument

logger = logging.getLogger(__name__)


class SignalsFormatter:
    """Formats bulletins into signal map SVG documents.

    ``colors`` is merged over the default level colour table. Assets default
    to the paths in ``settings`` and are read again on every call.
    """

    def __init__(
        self,
        colors: Mapping[int, str] | None = None,
        config: FormatterConfig | None = None,
        map_path: str | Path | None = None,
        overlay_path: str | Path | None = None,
        pipeline: Pipeline | None = None,
    ) -> None:
        self.config = (config or FormatterConfig()).with_overrides(colors=colors)
        self.map_path = Path(map_path) if map_path is not None else settings.tcws_map_path
        self.overlay_path = Path(overlay_path) if overlay_path is not None else settings.tcws_overlay_path
        self.pipeline = pipeline or create_pipeline()

    @property
    def colors(self) -> Mapping[int, str]:
        return self.config.colors

    def build_context(self, bulletin: Bulletin) -> FormatContext:
        """Load fresh copies of both assets into a new context."""
        return FormatContext(
            bulletin=bulletin,
            document=MapDocument.load(self.map_path),
            overlay=OverlayDocument.load(self.overlay_path),
            config=self.config,
        )

    def format(self, bulletin: Bulletin) -> bytes:
        """Render ``bulletin``. Raises FormatterError subclasses on failure."""
        ctx = self.build_context(bulletin)
        self.pipeline.run(ctx)
        logger.info(
            "Formatted bulletin #%d: %d features, %s×%s",
            bulletin.info.count,
            len(ctx.document),
            ctx.document.root.get("width"),
            ctx.document.root.get("height"),
        )
        return ctx.document.to_bytes()
