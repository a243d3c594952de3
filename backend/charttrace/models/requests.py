"""API request models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from charttrace.engine.calibrator import Axis, Endpoint


class OperatorIn(BaseModel):
    op: int | str = Field(..., description="pdf.js OPS code, pdf.js name, or content-stream mnemonic")
    args: list[Any] = Field(default_factory=list, description="Operator arguments")


class ExtractRequest(BaseModel):
    operators: list[OperatorIn] = Field(..., description="Decoded operator stream for one page")
    page: int = Field(default=1, description="Page number the stream came from")
    tolerance: float | None = Field(default=None, gt=0, description="Curve flattening tolerance")
    max_depth: int | None = Field(default=None, ge=0, description="Curve subdivision depth limit")


class SegmentRequest(BaseModel):
    axis: Axis
    curve_index: int | None = Field(default=None, description="Pick an extracted curve as the reference")
    points: list[tuple[float, float]] | None = Field(
        default=None,
        description="Or give reference points directly (reduced to their bounding extent)",
    )


class CalibrationValueRequest(BaseModel):
    axis: Axis
    endpoint: Endpoint
    value: str = Field(..., description="Data value as typed by the user")


class ConvertRequest(BaseModel):
    points: list[tuple[float, float]] = Field(default_factory=list)


class ExportSelection(BaseModel):
    label: str
    curve_index: int


class ExportRequest(BaseModel):
    curves: list[ExportSelection] = Field(..., description="Curves to export with their labels")
    format: Literal["csv", "json"] = "csv"
