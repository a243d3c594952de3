"""Pipeline orchestrator — runs extraction stages in dependency order.

A pass is all-or-nothing: the first failing stage aborts it and the context
is left with no paths and no curves, only the recorded error.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from charttrace.engine import stages  # noqa: F401  (registers the built-in stages)
from charttrace.engine.config import ExtractionConfig
from charttrace.engine.context import ExtractionContext, Operator
from charttrace.engine.errors import ExtractionError
from charttrace.engine.primitives import Curve
from charttrace.engine.registry import StageRegistry, get_registry

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates one extraction pass."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: ExtractionConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or ExtractionConfig()

    def run(self, ctx: ExtractionContext) -> ExtractionContext:
        """Run every registered stage on ``ctx``, aborting on the first failure."""
        start = time.perf_counter()
        ctx.config = self.config
        ordered = self.registry.resolve_order()

        logger.info("Pipeline: %d stages queued for page %d", len(ordered), ctx.page_number)

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                ctx.errors[spec.id] = str(e) or type(e).__name__
                ctx.discard_output()
                logger.warning("  %s FAILED: %s (extraction aborted)", spec.id, e)
                break
            ctx.completed_stages.add(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages, %d paths, %d curves in %.0fms",
            len(ctx.completed_stages),
            len(ordered),
            ctx.num_paths,
            len(ctx.curves),
            total,
        )
        return ctx


def create_pipeline(config: ExtractionConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config)


def extract_page(
    operators: Iterable[Operator],
    page_number: int = 1,
    config: ExtractionConfig | None = None,
) -> ExtractionContext:
    """Run a full pass over one page's operator stream. Failures are recorded, not raised."""
    ctx = ExtractionContext(operators=list(operators), page_number=page_number)
    return create_pipeline(config).run(ctx)


def extract_curves(operators: Iterable[Operator], config: ExtractionConfig | None = None) -> list[Curve]:
    """Like ``extract_page`` but returns the curves, raising ExtractionError on failure."""
    ctx = extract_page(operators, config=config)
    if ctx.failed:
        stage_id, message = next(iter(ctx.errors.items()))
        raise ExtractionError(f"{stage_id}: {message}")
    return ctx.curves
