"""Path and curve records produced by an extraction pass.

Path commands carry device-space coordinates: the interpreter bakes the CTM in
when each command is emitted, so nothing downstream needs the transform.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Union

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import LineString

from charttrace.utils.geometry import bbox


class PaintOp(str, enum.Enum):
    STROKE = "stroke"
    FILL = "fill"
    FILL_STROKE = "fill-and-stroke"
    EO_FILL = "even-odd-fill"
    EO_FILL_STROKE = "even-odd-fill-and-stroke"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CubicTo:
    cx1: float
    cy1: float
    cx2: float
    cy2: float
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = Union[MoveTo, LineTo, CubicTo, ClosePath]


@dataclass
class Path:
    """One painted (or still open) run of path commands."""

    commands: list[PathCommand] = field(default_factory=list)
    operation: PaintOp = PaintOp.UNKNOWN

    def __len__(self) -> int:
        return len(self.commands)

    @property
    def point_count(self) -> int:
        return sum(1 for cmd in self.commands if not isinstance(cmd, ClosePath))


@dataclass
class Curve:
    """A connected polyline derived from one sub-path of a Path."""

    # Nx2 array of (x, y) in device space
    points: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    operation: PaintOp = PaintOp.UNKNOWN
    path_index: int = 0
    # Position among all curves of the extraction pass
    index: int = 0
    features: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        return bbox(self.points)

    @property
    def closed(self) -> bool:
        return len(self.points) > 2 and bool(np.array_equal(self.points[0], self.points[-1]))

    @property
    def length(self) -> float:
        if len(self.points) < 2:
            return 0.0
        return float(LineString(self.points).length)
