"""Tests for adaptive cubic flattening."""

import numpy as np
import pytest
from svgpathtools import CubicBezier

from charttrace.engine.tessellator import flatness, tessellate_cubic


def _distance_to_polyline(point, polyline):
    best = np.inf
    for a, b in zip(polyline[:-1], polyline[1:]):
        ab = b - a
        denom = float(ab @ ab)
        t = 0.0 if denom == 0 else float(np.clip((point - a) @ ab / denom, 0.0, 1.0))
        best = min(best, float(np.linalg.norm(point - (a + t * ab))))
    return best


def test_endpoints_are_exact(arch_cubic):
    pts = tessellate_cubic(*arch_cubic)
    assert tuple(pts[0]) == arch_cubic[0]
    assert tuple(pts[-1]) == arch_cubic[3]


def test_arch_stays_within_tolerance(arch_cubic):
    pts = tessellate_cubic(*arch_cubic, tolerance=0.01)
    bezier = CubicBezier(*(complex(*p) for p in arch_cubic))
    for t in np.linspace(0.0, 1.0, 201):
        z = bezier.point(t)
        assert _distance_to_polyline(np.array([z.real, z.imag]), pts) <= 0.01


def test_output_follows_parameter_order(arch_cubic):
    pts = tessellate_cubic(*arch_cubic)
    # x(t) is monotonic for this arch
    assert np.all(np.diff(pts[:, 0]) >= 0)


def test_degenerate_cubic_collapses_to_a_point():
    p = (5.0, 5.0)
    pts = tessellate_cubic(p, p, p, p)
    assert len(pts) == 17
    assert np.all(pts == 5.0)


def test_collinear_cubic_gets_only_the_minimum_subdivisions():
    pts = tessellate_cubic((0, 0), (1, 0), (2, 0), (3, 0))
    # 2**3 leaves, two points each, plus the final end point
    assert len(pts) == 17
    assert np.all(pts[:, 1] == 0)


def test_s_curve_is_not_mistaken_for_a_line():
    # The parametric midpoint of this curve lies exactly on its chord
    pts = tessellate_cubic((0, 0), (0, 10), (10, -10), (10, 0))
    assert len(pts) > 3
    assert np.max(np.abs(pts[:, 1])) > 1.0


def test_zero_depth_still_applies_subdivision_floor(arch_cubic):
    pts = tessellate_cubic(*arch_cubic, max_depth=0)
    assert len(pts) == 17


def test_tighter_tolerance_adds_points(arch_cubic):
    coarse = tessellate_cubic(*arch_cubic, tolerance=0.01)
    fine = tessellate_cubic(*arch_cubic, tolerance=0.001)
    assert len(fine) > len(coarse)


def test_flatness_is_relative_to_chord():
    assert flatness((1.0, 1.0), (0.0, 0.0), (2.0, 0.0)) == 0.5
    assert flatness((1.0, 0.0), (0.0, 0.0), (2.0, 0.0)) == 0.0


def test_flatness_with_vanishing_chord_uses_raw_separation():
    assert flatness((3.0, 4.0), (0.0, 0.0), (0.0, 0.0)) == 5.0


def test_closed_loop_cubic_is_flattened():
    # Start and end coincide, so the top-level chord has zero length
    pts = tessellate_cubic((0, 0), (10, 10), (-10, 10), (0, 0))
    assert tuple(pts[0]) == (0.0, 0.0)
    assert tuple(pts[-1]) == (0.0, 0.0)
    assert len(pts) > 17
    assert np.max(pts[:, 1]) == pytest.approx(7.5)
