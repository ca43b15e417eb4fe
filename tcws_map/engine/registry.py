"""Stage registry: every stage is a standalone function registered via decorator.

Usage:
    @stage(id="S3.01", phase=Phase.CROP, dependencies=["S2.01"])
    def crop(ctx: FormatContext) -> None:
        crop_to_box(ctx.document, ctx.require_bounds(), ctx.config)

Adding a new stage = creating one module with the decorator and listing it in
``tcws_map.engine.stages``.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tcws_map.engine.context import FormatContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    COLORING = 1
    BOUNDS = 2
    CROP = 3
    COMPOSITE = 4
    RESCALE = 5
    OVERLAY = 6


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["FormatContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Registry of pipeline stages, ordered by declared dependencies."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def resolve_order(self) -> list[StageSpec]:
        """Every stage, ordered so each runs after its dependencies.

        Ties are broken by stage id. Raises KeyError for a dependency on an
        unregistered stage and ValueError for a cycle.
        """
        in_degree: dict[str, int] = {}
        dependents: dict[str, list[str]] = {sid: [] for sid in self._stages}
        for sid, spec in self._stages.items():
            for dep in spec.dependencies:
                if dep not in self._stages:
                    raise KeyError(f"Stage {sid} depends on unknown stage {dep}")
                dependents[dep].append(sid)
            in_degree[sid] = len(spec.dependencies)

        # Kahn's algorithm
        queue = sorted(sid for sid, d in in_degree.items() if d == 0)
        ordered: list[StageSpec] = []

        while queue:
            sid = queue.pop(0)
            ordered.append(self._stages[sid])
            for other_id in dependents[sid]:
                in_degree[other_id] -= 1
                if in_degree[other_id] == 0:
                    queue.append(other_id)
                    queue.sort()

        if len(ordered) != len(self._stages):
            missing = set(self._stages) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {sorted(missing)}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["FormatContext"], None]):
        _registry.register(
            StageSpec(
                id=id,
                phase=phase,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
