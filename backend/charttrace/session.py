"""In-memory document session: the calibrator and the last extraction's curves.

Calibration survives re-extraction; curves are replaced wholesale by each pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from charttrace.engine.calibrator import AxisCalibrator
from charttrace.engine.context import ExtractionContext
from charttrace.engine.primitives import Curve

logger = logging.getLogger(__name__)


@dataclass
class DocumentSession:
    calibrator: AxisCalibrator = field(default_factory=AxisCalibrator)
    page_number: int | None = None
    curves: list[Curve] = field(default_factory=list)

    def replace_extraction(self, ctx: ExtractionContext) -> None:
        self.page_number = ctx.page_number
        self.curves = list(ctx.curves)
        logger.debug("Session now holds %d curves from page %d", len(self.curves), ctx.page_number)

    def get_curve(self, index: int) -> Curve:
        for curve in self.curves:
            if curve.index == index:
                return curve
        raise KeyError(index)

    def clear(self) -> None:
        self.calibrator.reset()
        self.page_number = None
        self.curves = []


_session = DocumentSession()


def get_session() -> DocumentSession:
    return _session
