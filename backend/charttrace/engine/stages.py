"""Built-in extraction stages: interpret -> assemble -> describe."""

from __future__ import annotations

from charttrace.engine.assembler import assemble_curves
from charttrace.engine.context import ExtractionContext
from charttrace.engine.interpreter import GraphicsStateInterpreter
from charttrace.engine.registry import Layer, stage


@stage(
    id="E0.01",
    layer=Layer.INTERPRET,
    description="Replay the operator stream into painted paths",
)
def interpret_operators(ctx: ExtractionContext) -> None:
    ctx.paths = GraphicsStateInterpreter().run(ctx.operators)


@stage(
    id="E1.01",
    layer=Layer.ASSEMBLE,
    dependencies=["E0.01"],
    description="Flatten paths into connected polylines",
)
def assemble(ctx: ExtractionContext) -> None:
    ctx.curves = assemble_curves(ctx.paths, ctx.config)


@stage(
    id="E1.02",
    layer=Layer.ASSEMBLE,
    dependencies=["E1.01"],
    description="Record per-curve geometry for picking",
)
def curve_features(ctx: ExtractionContext) -> None:
    for curve in ctx.curves:
        curve.features["point_count"] = len(curve)
        curve.features["bbox"] = curve.bbox
        curve.features["length"] = curve.length
        curve.features["is_closed"] = curve.closed
