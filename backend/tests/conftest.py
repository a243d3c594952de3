"""Shared test fixtures."""

from __future__ import annotations

import pytest


# Operator streams as (opcode, args) pairs, spelled the way pdf.js emits them

TRIANGLE_FILL_OPS = [
    ("moveTo", [0, 0]),
    ("lineTo", [10, 0]),
    ("lineTo", [10, 10]),
    ("closePath", []),
    ("fill", []),
]

ARCH_CUBIC = ((0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0))

# A framed line chart: x axis, y axis, one data polyline, one smoothed series
LINE_CHART_OPS = [
    ("save", []),
    ("transform", [1, 0, 0, 1, 50, 50]),
    ("constructPath", [["moveTo", "lineTo"], [0, 0, 200, 0], [0, 0, 200, 0]]),
    ("stroke", []),
    ("constructPath", [["moveTo", "lineTo"], [0, 0, 0, 100], [0, 0, 0, 100]]),
    ("stroke", []),
    ("setStrokeRGBColor", [255, 0, 0]),
    ("moveTo", [0, 10]),
    ("lineTo", [50, 30]),
    ("lineTo", [100, 20]),
    ("lineTo", [200, 90]),
    ("stroke", []),
    ("moveTo", [0, 0]),
    ("curveTo", [50, 100, 150, 100, 200, 0]),
    ("stroke", []),
    ("restore", []),
]

# Same geometry written with content-stream mnemonics
MNEMONIC_RECT_OPS = [
    ("q", []),
    ("cm", [2, 0, 0, 2, 0, 0]),
    ("re", [1, 1, 4, 3]),
    ("f*", []),
    ("Q", []),
]

CLIP_ONLY_OPS = [
    ("rectangle", [0, 0, 100, 100]),
    ("clip", []),
    ("endPath", []),
]


@pytest.fixture
def triangle_ops() -> list:
    return list(TRIANGLE_FILL_OPS)


@pytest.fixture
def line_chart_ops() -> list:
    return list(LINE_CHART_OPS)


@pytest.fixture
def arch_cubic() -> tuple:
    return ARCH_CUBIC
