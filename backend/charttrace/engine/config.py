"""Curve flattening knobs for an extraction pass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ExtractionConfig:
    """Controls how painted paths are flattened into curves."""

    # Max normalized midpoint deviation (deviation / chord) accepted per segment
    tolerance: float = 0.01
    max_depth: int = 10
    # Every cubic is split at least this many times, flat or not
    min_subdivisions: int = 3
    # Chords at or below this length use point separation as the flatness signal
    chord_epsilon: float = 1e-12
