"""Turn labeled curves into downloadable delimited text or JSON."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from charttrace.engine.calibrator import AxisCalibrator
from charttrace.engine.errors import NotCalibratedError
from charttrace.engine.primitives import Curve
from charttrace.models.export import DataPoint, LabeledCurve

logger = logging.getLogger(__name__)

CSV_HEADER = "Label, X, Y"


def prepare_labeled_curves(
    selections: Iterable[tuple[str, Curve]],
    calibrator: AxisCalibrator,
) -> list[LabeledCurve]:
    """Map each (label, curve) selection into data space.

    Refuses to run until both axes are calibrated. Curves that end up with no
    points are dropped.
    """
    if not calibrator.is_calibrated():
        raise NotCalibratedError("Calibrator must be calibrated before exporting data")

    # Raises DegenerateAxisError before any curve is touched
    calibrator.derive_scale()

    labeled: list[LabeledCurve] = []
    for label, curve in selections:
        converted = calibrator.convert_points(curve.points)
        if converted is None or len(converted) == 0:
            continue
        labeled.append(
            LabeledCurve(
                label=label,
                points=[DataPoint(x=float(x), y=float(y)) for x, y in converted],
                curve_index=curve.index,
            )
        )

    logger.info("Prepared %d labeled curves for export", len(labeled))
    return labeled


def to_csv(curves: Iterable[LabeledCurve]) -> str:
    """``Label, X, Y`` rows, one per point, with a blank line after each curve."""
    lines = [CSV_HEADER]
    for curve in curves:
        for point in curve.points:
            lines.append(f"{curve.label}, {_format_number(point.x)}, {_format_number(point.y)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def to_json(curves: Iterable[LabeledCurve]) -> str:
    """Indented JSON holding the full labeled-curve list."""
    return json.dumps([c.model_dump() for c in curves], indent=2)


def _format_number(value: float) -> str:
    # 50.0 -> "50", 0.1 -> "0.1"
    if value.is_integer():
        return str(int(value))
    return repr(value)
