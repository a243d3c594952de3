"""Export records — calibrated, labeled curves."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DataPoint(BaseModel):
    x: float
    y: float


class LabeledCurve(BaseModel):
    label: str
    points: list[DataPoint] = Field(default_factory=list)
    curve_index: int
