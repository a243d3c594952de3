"""Axis calibration: maps device-space geometry onto data coordinates.

Each axis is calibrated on its own from a reference segment picked on the
page and the two data values at the segment's ends. The mapping is a plain
scale + offset per axis; chart axes are assumed parallel to the page axes, so
there is no rotation or shear term.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from charttrace.engine.errors import CalibrationError, DegenerateAxisError, NotCalibratedError
from charttrace.engine.primitives import Curve
from charttrace.utils.geometry import bbox

logger = logging.getLogger(__name__)


class Axis(str, enum.Enum):
    X = "x"
    Y = "y"


class Endpoint(str, enum.Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class CalibrationSegment:
    """Reference geometry for one axis, as (x1, y1) -> (x2, y2).

    Built from a point set this is the bounding extent (min corner, max corner).
    """

    x1: float
    y1: float
    x2: float
    y2: float

    @classmethod
    def from_points(cls, points: Any) -> CalibrationSegment:
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(pts) == 0:
            raise ValueError("Cannot calibrate from an empty point set")
        min_x, min_y, max_x, max_y = bbox(pts)
        return cls(min_x, min_y, max_x, max_y)

    def extent(self, axis: Axis) -> tuple[float, float]:
        """(geom_min, geom_max) along the axis's own coordinate."""
        if axis is Axis.X:
            return (self.x1, self.x2)
        return (self.y1, self.y2)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x1, self.y1, self.x2, self.y2)


@dataclass
class CalibrationValues:
    min: float | None = None
    max: float | None = None

    @property
    def complete(self) -> bool:
        return self.min is not None and self.max is not None


@dataclass(frozen=True)
class AxisCalibration:
    scale: float
    offset: float
    data_min: float
    data_max: float

    def apply(self, value: float) -> float:
        return value * self.scale + self.offset


@dataclass(frozen=True)
class ScaleFactors:
    x: AxisCalibration
    y: AxisCalibration


class AxisCalibrator:
    """Holds the four calibration slots: segment + values for each axis."""

    def __init__(self) -> None:
        self.segments: dict[Axis, CalibrationSegment | None] = {}
        self.values: dict[Axis, CalibrationValues] = {}
        self.reset()

    def reset(self) -> None:
        self.segments = {Axis.X: None, Axis.Y: None}
        self.values = {Axis.X: CalibrationValues(), Axis.Y: CalibrationValues()}

    def set_segment(self, axis: Axis | str, geometry: CalibrationSegment | Curve | Any) -> bool:
        """Store the reference geometry for ``axis``. Returns whether that axis is now calibrated.

        A ``CalibrationSegment`` is kept as given; a curve or any Nx2 point set
        is reduced to its bounding extent.
        """
        ax = Axis(axis)
        if isinstance(geometry, CalibrationSegment):
            segment = geometry
        elif isinstance(geometry, Curve):
            segment = CalibrationSegment.from_points(geometry.points)
        else:
            segment = CalibrationSegment.from_points(geometry)
        self.segments[ax] = segment
        logger.debug("Set %s-axis segment: %s", ax.value, segment)
        return self.is_calibrated(ax)

    def set_value(self, axis: Axis | str, endpoint: Endpoint | str, value: float | str) -> None:
        """Record the data value at the segment's start (min) or end (max)."""
        ax = Axis(axis)
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"Calibration value must be finite, got {value!r}")
        if Endpoint(endpoint) is Endpoint.START:
            self.values[ax].min = number
        else:
            self.values[ax].max = number
        logger.debug("Set %s-axis %s value: %s", ax.value, Endpoint(endpoint).value, number)

    def is_calibrated(self, axis: Axis | str | None = None) -> bool:
        if axis is None:
            return self.is_calibrated(Axis.X) and self.is_calibrated(Axis.Y)
        ax = Axis(axis)
        return self.segments[ax] is not None and self.values[ax].complete

    def derive_scale(self) -> ScaleFactors:
        """Compute scale/offset for both axes.

        Each fully set axis is derived on its own first, so a zero-extent
        reference raises DegenerateAxisError even while the other axis is
        still incomplete. Any empty slot then raises NotCalibratedError.
        """
        derived = {ax: self._derive_axis(ax) for ax in Axis if self.is_calibrated(ax)}
        if len(derived) < len(Axis):
            raise NotCalibratedError()
        return ScaleFactors(x=derived[Axis.X], y=derived[Axis.Y])

    def convert_point(self, x: float, y: float) -> tuple[float, float] | None:
        """Map a device-space point into data space, or None if calibration is unavailable."""
        factors = self._factors_or_none()
        if factors is None:
            return None
        return (factors.x.apply(x), factors.y.apply(y))

    def convert_points(self, points: Any) -> NDArray[np.float64] | None:
        """Vectorized ``convert_point`` over an Nx2 array."""
        factors = self._factors_or_none()
        if factors is None:
            return None
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return np.column_stack(
            (
                pts[:, 0] * factors.x.scale + factors.x.offset,
                pts[:, 1] * factors.y.scale + factors.y.offset,
            )
        )

    def status(self) -> dict[str, Any]:
        return {
            "calibrated": self.is_calibrated(),
            "x_calibrated": self.is_calibrated(Axis.X),
            "y_calibrated": self.is_calibrated(Axis.Y),
            "segments": {
                ax.value: (seg.as_tuple() if seg is not None else None) for ax, seg in self.segments.items()
            },
            "values": {ax.value: {"min": v.min, "max": v.max} for ax, v in self.values.items()},
        }

    def _derive_axis(self, axis: Axis) -> AxisCalibration:
        segment = self.segments[axis]
        values = self.values[axis]
        if segment is None or values.min is None or values.max is None:
            raise NotCalibratedError(f"{axis.value.upper()}-axis calibration is incomplete")

        geom_min, geom_max = segment.extent(axis)
        geom_span = geom_max - geom_min
        if geom_span == 0:
            err = DegenerateAxisError(axis.value)
            logger.warning(err.message)
            raise err

        scale = (values.max - values.min) / geom_span
        offset = values.min - geom_min * scale
        logger.debug(
            "%s: page range [%.2f, %.2f] -> data range [%s, %s]",
            axis.value.upper(),
            geom_min,
            geom_max,
            values.min,
            values.max,
        )
        return AxisCalibration(scale=scale, offset=offset, data_min=values.min, data_max=values.max)

    def _factors_or_none(self) -> ScaleFactors | None:
        try:
            return self.derive_scale()
        except CalibrationError as e:
            logger.debug("Point conversion unavailable: %s", e)
            return None
