"""Exceptions raised by the extraction and calibration engine."""

from __future__ import annotations


class ChartTraceError(Exception):
    """Base exception for all ChartTrace errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown ChartTrace error occurred."


class ExtractionError(ChartTraceError):
    """Raised when an operator stream could not be replayed into paths."""

    @property
    def default_message(self) -> str:
        return "Operator stream could not be extracted."


class CalibrationError(ChartTraceError):
    """Base class for calibration failures."""

    @property
    def default_message(self) -> str:
        return "Axis calibration is unavailable."


class NotCalibratedError(CalibrationError):
    """Raised when scale factors or export are requested before both axes are calibrated."""

    @property
    def default_message(self) -> str:
        return "Both axes must be calibrated first."


class DegenerateAxisError(CalibrationError):
    """Raised when an axis reference has zero extent along its own coordinate."""

    def __init__(self, axis: str, message: str = "") -> None:
        self.axis = axis
        super().__init__(message)

    @property
    def default_message(self) -> str:
        direction = "horizontal" if self.axis == "x" else "vertical"
        return f"{self.axis.upper()}-axis calibration error: selected path has no {direction} extent"
