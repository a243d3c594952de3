"""Adaptive cubic Bézier flattening.

A segment ``[umin, umax]`` is split at its parameter midpoint until the curve
point there lies within ``tolerance`` of the chord, measured relative to the
chord length. Every curve is split at least ``min_subdivisions`` times first:
a midpoint that happens to sit on the chord (S-curves, inflections) would
otherwise pass the flatness test on the very first chord. Beyond that floor a
segment whose chord has vanished is never split further.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from svgpathtools import CubicBezier

from charttrace.engine.config import ExtractionConfig
from charttrace.utils.geometry import distance, perpendicular_distance

Point = tuple[float, float]

_DEFAULTS = ExtractionConfig()


def tessellate_cubic(
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    tolerance: float = _DEFAULTS.tolerance,
    max_depth: int = _DEFAULTS.max_depth,
    min_subdivisions: int = _DEFAULTS.min_subdivisions,
    chord_epsilon: float = _DEFAULTS.chord_epsilon,
) -> NDArray[np.float64]:
    """Flatten a cubic into an Nx2 polyline running from ``p0`` to ``p3`` inclusive.

    The end points are emitted exactly as given, never re-evaluated.
    """
    bezier = CubicBezier(_to_complex(p0), _to_complex(p1), _to_complex(p2), _to_complex(p3))
    start = (float(p0[0]), float(p0[1]))
    end = (float(p3[0]), float(p3[1]))

    out: list[Point] = []
    _subdivide(
        bezier,
        0.0,
        1.0,
        start,
        end,
        max_depth,
        0,
        tolerance,
        min_subdivisions,
        chord_epsilon,
        out,
    )
    out.append(end)
    return np.array(out, dtype=np.float64)


def flatness(pmid: Point, pmin: Point, pmax: Point, chord_epsilon: float = _DEFAULTS.chord_epsilon) -> float:
    """Midpoint deviation from the chord, normalized by chord length.

    A vanishing chord has no meaningful normal, so the raw separation of
    ``pmid`` from ``pmin`` is returned instead.
    """
    chord = distance(pmin, pmax)
    if chord <= chord_epsilon:
        return distance(pmin, pmid)
    return perpendicular_distance(pmid, pmin, pmax) / chord


def _subdivide(
    bezier: CubicBezier,
    umin: float,
    umax: float,
    pmin: Point,
    pmax: Point,
    depth: int,
    subdivisions: int,
    tolerance: float,
    min_subdivisions: int,
    chord_epsilon: float,
    out: list[Point],
) -> None:
    umid = (umin + umax) / 2
    pmid = _point_at(bezier, umid)
    d = flatness(pmid, pmin, pmax, chord_epsilon)
    # Past the floor, a vanishing chord is accepted as flat
    splittable = depth > 0 and distance(pmin, pmax) > chord_epsilon

    if (d > tolerance and splittable) or subdivisions < min_subdivisions:
        args = (tolerance, min_subdivisions, chord_epsilon, out)
        _subdivide(bezier, umin, umid, pmin, pmid, depth - 1, subdivisions + 1, *args)
        _subdivide(bezier, umid, umax, pmid, pmax, depth - 1, subdivisions + 1, *args)
        return

    # pmax is emitted by the next leaf (or by the caller for the last one)
    out.append(pmin)
    out.append(pmid)


def _point_at(bezier: CubicBezier, t: float) -> Point:
    pt = bezier.point(t)
    return (float(pt.real), float(pt.imag))


def _to_complex(p: Point) -> complex:
    return complex(float(p[0]), float(p[1]))
