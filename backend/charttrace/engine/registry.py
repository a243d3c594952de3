"""Stage registry. Extraction stages are plain functions registered by decorator.

    @stage(id="E1.01", layer=Layer.ASSEMBLE, dependencies=["E0.01"])
    def assemble(ctx: ExtractionContext) -> None:
        ...
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from charttrace.engine.context import ExtractionContext

logger = logging.getLogger(__name__)

StageFn = Callable[["ExtractionContext"], None]


class Layer(enum.IntEnum):
    INTERPRET = 0
    ASSEMBLE = 1


@dataclass(frozen=True)
class StageSpec:
    id: str
    layer: Layer
    fn: StageFn
    dependencies: tuple[str, ...] = field(default_factory=tuple)
    description: str = ""

    @property
    def sort_key(self) -> tuple[int, str]:
        return (int(self.layer), self.id)


class StageRegistry:
    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.layer.name)

    @property
    def count(self) -> int:
        return len(self._stages)

    def resolve_order(self) -> list[StageSpec]:
        """Stages in dependency order; among ready stages, lower layer then ID first."""
        waiting: dict[str, set[str]] = {}
        dependents: dict[str, list[str]] = {sid: [] for sid in self._stages}
        for spec in self._stages.values():
            missing = [dep for dep in spec.dependencies if dep not in self._stages]
            if missing:
                raise ValueError(f"Stage {spec.id} depends on unknown stage {missing[0]}")
            waiting[spec.id] = set(spec.dependencies)
            for dep in spec.dependencies:
                dependents[dep].append(spec.id)

        ready = [self._stages[sid].sort_key for sid, deps in waiting.items() if not deps]
        heapq.heapify(ready)
        ordered: list[StageSpec] = []
        while ready:
            _, sid = heapq.heappop(ready)
            ordered.append(self._stages[sid])
            for other in dependents[sid]:
                waiting[other].discard(sid)
                if not waiting[other]:
                    heapq.heappush(ready, self._stages[other].sort_key)

        if len(ordered) != len(self._stages):
            stuck = sorted(sid for sid, deps in waiting.items() if deps)
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered


_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
) -> Callable[[StageFn], StageFn]:
    """Register ``fn`` as a stage in the module-level registry."""

    def decorator(fn: StageFn) -> StageFn:
        _registry.register(StageSpec(id, layer, fn, tuple(dependencies or ()), description))
        return fn

    return decorator
