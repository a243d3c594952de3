"""ChartTrace extraction and calibration engine."""

from charttrace.engine.calibrator import Axis, AxisCalibrator, CalibrationSegment, Endpoint
from charttrace.engine.context import ExtractionContext
from charttrace.engine.pipeline import Pipeline, create_pipeline, extract_curves, extract_page
from charttrace.engine.primitives import Curve, Path, PaintOp
from charttrace.engine.registry import Layer, get_registry, stage

__all__ = [
    "Axis",
    "AxisCalibrator",
    "CalibrationSegment",
    "Endpoint",
    "ExtractionContext",
    "Pipeline",
    "create_pipeline",
    "extract_curves",
    "extract_page",
    "Curve",
    "Path",
    "PaintOp",
    "Layer",
    "get_registry",
    "stage",
]
