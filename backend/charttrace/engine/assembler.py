"""Curve assembler: turns painted paths into connected polylines.

Each MoveTo starts a new curve. Cubic segments are flattened by the
tessellator from the current pen position.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from charttrace.engine.config import ExtractionConfig
from charttrace.engine.primitives import ClosePath, CubicTo, Curve, LineTo, MoveTo, Path
from charttrace.engine.tessellator import tessellate_cubic

logger = logging.getLogger(__name__)

Point = tuple[float, float]


def path_to_curves(path: Path, path_index: int = 0, config: ExtractionConfig | None = None) -> list[Curve]:
    """Replay one path's commands into zero or more curves."""
    cfg = config or ExtractionConfig()
    curves: list[Curve] = []
    polyline: list[Point] = []
    pos: Point = (0.0, 0.0)

    def flush() -> None:
        if polyline:
            curves.append(
                Curve(
                    points=np.array(polyline, dtype=np.float64),
                    operation=path.operation,
                    path_index=path_index,
                )
            )
            polyline.clear()

    for cmd in path.commands:
        if isinstance(cmd, MoveTo):
            flush()
            pos = (cmd.x, cmd.y)
            polyline.append(pos)

        elif isinstance(cmd, LineTo):
            pos = (cmd.x, cmd.y)
            polyline.append(pos)

        elif isinstance(cmd, CubicTo):
            flattened = tessellate_cubic(
                pos,
                (cmd.cx1, cmd.cy1),
                (cmd.cx2, cmd.cy2),
                (cmd.x, cmd.y),
                tolerance=cfg.tolerance,
                max_depth=cfg.max_depth,
                min_subdivisions=cfg.min_subdivisions,
                chord_epsilon=cfg.chord_epsilon,
            )
            for x, y in flattened:
                pt = (float(x), float(y))
                # Skip zero-length steps (the curve start usually repeats the pen position)
                if polyline and polyline[-1] == pt:
                    continue
                polyline.append(pt)
            pos = (cmd.x, cmd.y)

        elif isinstance(cmd, ClosePath):
            if polyline:
                first = polyline[0]
                if polyline[-1] != first:
                    polyline.append(first)
                pos = first

    flush()
    return curves


def assemble_curves(paths: Iterable[Path], config: ExtractionConfig | None = None) -> list[Curve]:
    """Flatten every path, numbering curves in production order."""
    curves: list[Curve] = []
    for path_index, path in enumerate(paths):
        for curve in path_to_curves(path, path_index, config):
            curve.index = len(curves)
            curves.append(curve)
    logger.debug("Assembled %d curves (%d points)", len(curves), sum(len(c) for c in curves))
    return curves
