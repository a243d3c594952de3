"""Affine transform algebra. No engine imports.

A transform ``(a, b, c, d, e, f)`` maps ``(x, y)`` to
``(a*x + c*y + e, b*x + d*y + f)``, the layout used by page-description
operator streams for the current transformation matrix.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AffineTransform:
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return apply_transform(self, x, y)

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)


IDENTITY = AffineTransform()


def apply_transform(t: AffineTransform, x: float, y: float) -> tuple[float, float]:
    """Map a single point through ``t``."""
    return (t.a * x + t.c * y + t.e, t.b * x + t.d * y + t.f)


def compose(old: AffineTransform, applied: AffineTransform) -> AffineTransform:
    """Return ``old ∘ applied``: points go through ``applied`` first, then ``old``.

    This is how a concatenated matrix nests inside the running CTM.
    """
    a1, b1, c1, d1, e1, f1 = old.as_tuple()
    a2, b2, c2, d2, e2, f2 = applied.as_tuple()
    return AffineTransform(
        a=a1 * a2 + c1 * b2,
        b=b1 * a2 + d1 * b2,
        c=a1 * c2 + c1 * d2,
        d=b1 * c2 + d1 * d2,
        e=a1 * e2 + c1 * f2 + e1,
        f=b1 * e2 + d1 * f2 + f1,
    )


class TransformStack:
    """LIFO of saved transforms for graphics-state save/restore."""

    def __init__(self) -> None:
        self._saved: list[AffineTransform] = []

    def push(self, transform: AffineTransform) -> None:
        self._saved.append(transform)

    def pop(self, current: AffineTransform) -> AffineTransform:
        """Return the most recently saved transform, or ``current`` if nothing was saved."""
        if not self._saved:
            return current
        return self._saved.pop()

    def __len__(self) -> int:
        return len(self._saved)

    def clear(self) -> None:
        self._saved.clear()
