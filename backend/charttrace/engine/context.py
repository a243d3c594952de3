"""ExtractionContext — the single mutable state object flowing through all stages.

One context per extraction pass. Discarding it abandons the pass.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from charttrace.engine.config import ExtractionConfig
from charttrace.engine.primitives import Curve, Path

# (opcode, args), with opcode as an Op, pdf.js code, name, or mnemonic
Operator = tuple[Any, Sequence[Any]]


@dataclass
class ExtractionContext:
    """Shared state for one page's extraction pass."""

    # Decoded operator stream for the page
    operators: list[Operator] = field(default_factory=list)
    page_number: int = 1
    config: ExtractionConfig = field(default_factory=ExtractionConfig)

    # --- Stage output ---
    paths: list[Path] = field(default_factory=list)
    curves: list[Curve] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def num_paths(self) -> int:
        return len(self.paths)

    def get_curve(self, index: int) -> Curve | None:
        for curve in self.curves:
            if curve.index == index:
                return curve
        return None

    def discard_output(self) -> None:
        self.paths = []
        self.curves = []
