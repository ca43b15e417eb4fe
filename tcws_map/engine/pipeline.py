"""Pipeline orchestrator: runs stages in dependency order, failing fast."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from tcws_map.engine.context import FormatContext
from tcws_map.engine.registry import StageRegistry, get_registry
from tcws_map.errors import FormatterError, StageError

logger = logging.getLogger(__name__)


class Pipeline:
    """Runs every registered stage once, in order, on a FormatContext."""

    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: FormatContext) -> FormatContext:
        """Run the full pipeline. The first failing stage aborts the run."""
        start = time.perf_counter()
        ordered = self.registry.resolve_order()

        logger.debug("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.error("  %s FAILED: %s", spec.id, e)
                message = str(e) if isinstance(e, FormatterError) else f"{type(e).__name__}: {e}"
                raise StageError(spec.id, message) from e
            ctx.completed_stages.append(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d stages in %.0fms",
            len(ctx.completed_stages),
            total,
        )
        return ctx


def register_stages() -> int:
    """Import every stage module so @stage decorators fire."""
    package = importlib.import_module("tcws_map.engine.stages")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package.__name__}.{module_name}")
    return get_registry().count


def create_pipeline() -> Pipeline:
    """Factory function for a pipeline over the global stage registry."""
    register_stages()
    return Pipeline()
