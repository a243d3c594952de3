"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class CurveOut(BaseModel):
    index: int
    path_index: int
    operation: str
    points: list[tuple[float, float]] = Field(default_factory=list)
    bbox: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    closed: bool = False
    point_count: int = 0
    length: float = 0.0


class ExtractResponse(BaseModel):
    page: int = 1
    path_count: int = 0
    curves: list[CurveOut] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    stages_completed: int = 0
    errors: dict[str, str] = Field(default_factory=dict)


class AxisScaleOut(BaseModel):
    scale: float
    offset: float
    data_min: float
    data_max: float


class CalibrationStatusResponse(BaseModel):
    calibrated: bool = False
    x_calibrated: bool = False
    y_calibrated: bool = False
    segments: dict[str, tuple[float, float, float, float] | None] = Field(default_factory=dict)
    values: dict[str, dict[str, float | None]] = Field(default_factory=dict)
    scale: dict[str, AxisScaleOut] | None = None
    error: str = ""


class ConvertResponse(BaseModel):
    available: bool
    points: list[tuple[float, float]] = Field(default_factory=list)
