"""Tests for the extraction pipeline."""

import numpy as np
import pytest

from charttrace.engine.calibrator import AxisCalibrator
from charttrace.engine.config import ExtractionConfig
from charttrace.engine.context import ExtractionContext
from charttrace.engine.errors import ExtractionError
from charttrace.engine.pipeline import Pipeline, extract_curves, extract_page
from charttrace.engine.primitives import PaintOp
from charttrace.engine.registry import Layer, StageRegistry, StageSpec


def test_triangle_pass(triangle_ops):
    ctx = extract_page(triangle_ops)
    assert not ctx.failed
    assert ctx.completed_stages == {"E0.01", "E1.01", "E1.02"}
    assert ctx.num_paths == 1
    (curve,) = ctx.curves
    assert curve.operation == PaintOp.FILL
    assert curve.features["is_closed"] is True
    assert curve.features["point_count"] == 4
    assert curve.features["bbox"] == (0.0, 0.0, 10.0, 10.0)
    assert curve.features["length"] == pytest.approx(20 + 10 * np.sqrt(2))


def test_malformed_stream_aborts_the_pass(triangle_ops):
    ctx = extract_page(triangle_ops + [("moveTo", [1])], page_number=4)
    assert ctx.failed
    assert "E0.01" in ctx.errors
    assert ctx.paths == []
    assert ctx.curves == []
    assert "E1.01" not in ctx.completed_stages
    assert ctx.page_number == 4


def test_extract_curves_raises_on_failure():
    with pytest.raises(ExtractionError, match="E0.01"):
        extract_curves([("transform", [1, 0, 0])])


def test_config_reaches_the_assembler(arch_cubic):
    (p0, p1, p2, p3) = arch_cubic
    ops = [("moveTo", list(p0)), ("curveTo", [*p1, *p2, *p3]), ("stroke", [])]
    coarse = extract_curves(ops, ExtractionConfig(tolerance=0.1))
    fine = extract_curves(ops, ExtractionConfig(tolerance=0.001))
    assert len(fine[0]) > len(coarse[0])


def test_custom_registry_failure_discards_output():
    def produce(ctx):
        ctx.paths = ["placeholder"]

    def explode(ctx):
        raise RuntimeError()

    registry = StageRegistry()
    registry.register(StageSpec("S1", Layer.INTERPRET, produce))
    registry.register(StageSpec("S2", Layer.ASSEMBLE, explode, dependencies=["S1"]))

    ctx = Pipeline(registry).run(ExtractionContext())
    assert ctx.errors == {"S2": "RuntimeError"}
    assert ctx.completed_stages == {"S1"}
    assert ctx.paths == []


def test_line_chart_end_to_end(line_chart_ops):
    ctx = extract_page(line_chart_ops)
    assert not ctx.failed
    assert len(ctx.curves) == 4

    x_axis, y_axis, series = ctx.get_curve(0), ctx.get_curve(1), ctx.get_curve(2)
    assert x_axis.bbox == (50.0, 50.0, 250.0, 50.0)
    assert y_axis.bbox == (50.0, 50.0, 50.0, 150.0)
    assert all(c.operation == PaintOp.STROKE for c in ctx.curves)

    cal = AxisCalibrator()
    cal.set_segment("x", x_axis)
    cal.set_value("x", "start", 0)
    cal.set_value("x", "end", 100)
    cal.set_segment("y", y_axis)
    cal.set_value("y", "start", 0)
    cal.set_value("y", "end", 50)

    data = cal.convert_points(series.points)
    np.testing.assert_allclose(data, [[0, 5], [25, 15], [50, 10], [100, 45]])

    arch = ctx.get_curve(3)
    assert tuple(arch.points[0]) == (50.0, 50.0)
    assert tuple(arch.points[-1]) == (250.0, 50.0)
