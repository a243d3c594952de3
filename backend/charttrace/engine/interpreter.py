"""Graphics-state interpreter. Replays a page's operator stream into painted paths.

Only the operators that shape path geometry are acted on: save/restore,
transform concatenation, path construction and painting. Everything else
(text, color, images, clipping, marked content) passes through untouched.

Dispatch is a static ``Op -> handler`` table filled by ``@_handles`` at import:

    @_handles(Op.SAVE)
    def _save(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
        interp.save()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from charttrace.engine.context import Operator
from charttrace.engine.ops import SUBPATH_ARITY, Op
from charttrace.engine.primitives import ClosePath, CubicTo, LineTo, MoveTo, PaintOp, Path, PathCommand
from charttrace.utils.affine import IDENTITY, AffineTransform, TransformStack, compose

logger = logging.getLogger(__name__)

Point = tuple[float, float]
Handler = Callable[["GraphicsStateInterpreter", Sequence[Any]], None]

_HANDLERS: dict[Op, Handler] = {}

PAINT_OPERATIONS: dict[Op, PaintOp] = {
    Op.STROKE: PaintOp.STROKE,
    Op.FILL: PaintOp.FILL,
    Op.FILL_STROKE: PaintOp.FILL_STROKE,
    Op.EO_FILL: PaintOp.EO_FILL,
    Op.EO_FILL_STROKE: PaintOp.EO_FILL_STROKE,
    # Closing variants: close the sub-path, then paint
    Op.CLOSE_STROKE: PaintOp.STROKE,
    Op.CLOSE_FILL_STROKE: PaintOp.FILL_STROKE,
    Op.CLOSE_EO_FILL_STROKE: PaintOp.EO_FILL_STROKE,
}

_CLOSING_PAINTS = {Op.CLOSE_STROKE, Op.CLOSE_FILL_STROKE, Op.CLOSE_EO_FILL_STROKE}


class GraphicsStateInterpreter:
    """Tracks the CTM and the current path while an operator stream is replayed."""

    def __init__(self) -> None:
        self.ctm: AffineTransform = IDENTITY
        self.transform_stack = TransformStack()
        self.current_path: Path | None = None
        self.paths: list[Path] = []
        # Device-space pen position and start of the open sub-path
        self.current_point: Point | None = None
        self.subpath_start: Point | None = None

    def reset(self) -> None:
        self.ctm = IDENTITY
        self.transform_stack.clear()
        self.current_path = None
        self.paths = []
        self.current_point = None
        self.subpath_start = None

    def run(self, operators: Iterable[Operator]) -> list[Path]:
        """Replay a whole operator stream from a clean state."""
        self.reset()
        count = 0
        for opcode, args in operators:
            self.process(opcode, args)
            count += 1
        self.finish()
        logger.info(
            "Interpreted %d operators: %d paths, %d path points",
            count,
            len(self.paths),
            sum(p.point_count for p in self.paths),
        )
        return self.paths

    def process(self, opcode: Any, args: Sequence[Any] | None) -> None:
        op = Op.parse(opcode)
        if op is None:
            return
        handler = _HANDLERS.get(op)
        if handler is None:
            return
        handler(self, args if args is not None else ())

    def finish(self) -> None:
        """Surface a path whose paint operator never arrived (e.g. a clip)."""
        if self.current_path is not None and len(self.current_path) > 0:
            self.current_path.operation = PaintOp.UNKNOWN
            self.paths.append(self.current_path)
        self.current_path = None

    # --- Graphics state ---

    def save(self) -> None:
        self.transform_stack.push(self.ctm)

    def restore(self) -> None:
        self.ctm = self.transform_stack.pop(self.ctm)

    def concat(self, a: float, b: float, c: float, d: float, e: float, f: float) -> None:
        self.ctm = compose(self.ctm, AffineTransform(a, b, c, d, e, f))

    # --- Path construction (user-space arguments) ---

    def move_to(self, x: float, y: float) -> None:
        p = self.ctm.apply(x, y)
        self._emit(MoveTo(*p))
        self.current_point = p
        self.subpath_start = p

    def line_to(self, x: float, y: float) -> None:
        p = self.ctm.apply(x, y)
        self._emit(LineTo(*p))
        self.current_point = p

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        c1 = self.ctm.apply(x1, y1)
        c2 = self.ctm.apply(x2, y2)
        end = self.ctm.apply(x3, y3)
        self._emit_cubic(c1, c2, end)

    def curve_to_from_current(self, x2: float, y2: float, x3: float, y3: float) -> None:
        """Cubic whose first control point is the current point."""
        c2 = self.ctm.apply(x2, y2)
        end = self.ctm.apply(x3, y3)
        c1 = self.current_point if self.current_point is not None else (0.0, 0.0)
        self._emit_cubic(c1, c2, end)

    def curve_to_end(self, x1: float, y1: float, x3: float, y3: float) -> None:
        """Cubic whose second control point is the end point."""
        c1 = self.ctm.apply(x1, y1)
        end = self.ctm.apply(x3, y3)
        self._emit_cubic(c1, end, end)

    def close_path(self) -> None:
        self._emit(ClosePath())
        if self.subpath_start is not None:
            self.current_point = self.subpath_start

    def rectangle(self, x: float, y: float, w: float, h: float) -> None:
        self.move_to(x, y)
        self.line_to(x + w, y)
        self.line_to(x + w, y + h)
        self.line_to(x, y + h)
        self.close_path()

    # --- Painting ---

    def paint(self, operation: PaintOp) -> None:
        if self.current_path is None or len(self.current_path) == 0:
            return
        self.current_path.operation = operation
        self.paths.append(self.current_path)
        self.current_path = None

    # --- Internals ---

    def _emit(self, command: PathCommand) -> None:
        if self.current_path is None:
            self.current_path = Path()
        self.current_path.commands.append(command)

    def _emit_cubic(self, c1: Point, c2: Point, end: Point) -> None:
        self._emit(CubicTo(c1[0], c1[1], c2[0], c2[1], end[0], end[1]))
        self.current_point = end


def _handles(*ops: Op) -> Callable[[Handler], Handler]:
    """Register a handler for one or more opcodes."""

    def decorator(fn: Handler) -> Handler:
        for op in ops:
            if op in _HANDLERS:
                raise ValueError(f"Duplicate handler for {op.name}")
            _HANDLERS[op] = fn
        return fn

    return decorator


@_handles(Op.SAVE)
def _save(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    interp.save()


@_handles(Op.RESTORE)
def _restore(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    interp.restore()


@_handles(Op.TRANSFORM)
def _transform(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    a, b, c, d, e, f = args
    interp.concat(a, b, c, d, e, f)


@_handles(Op.MOVE_TO)
def _move_to(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    x, y = args
    interp.move_to(x, y)


@_handles(Op.LINE_TO)
def _line_to(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    x, y = args
    interp.line_to(x, y)


@_handles(Op.CURVE_TO)
def _curve_to(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    x1, y1, x2, y2, x3, y3 = args
    interp.curve_to(x1, y1, x2, y2, x3, y3)


@_handles(Op.CURVE_TO2)
def _curve_to2(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    x2, y2, x3, y3 = args
    interp.curve_to_from_current(x2, y2, x3, y3)


@_handles(Op.CURVE_TO3)
def _curve_to3(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    x1, y1, x3, y3 = args
    interp.curve_to_end(x1, y1, x3, y3)


@_handles(Op.CLOSE_PATH)
def _close_path(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    interp.close_path()


@_handles(Op.RECTANGLE)
def _rectangle(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    x, y, w, h = args
    interp.rectangle(x, y, w, h)


@_handles(Op.CONSTRUCT_PATH)
def _construct_path(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
    # pdf.js also appends a [minX, minY, maxX, maxY] box we don't need
    sub_ops, coords = args[0], args[1]
    pos = 0
    for raw in sub_ops:
        op = Op.parse(raw)
        arity = SUBPATH_ARITY.get(op) if op is not None else None
        if arity is None:
            logger.debug("Skipping unsupported constructPath sub-operator %r", raw)
            continue
        handler = _HANDLERS[op]
        handler(interp, coords[pos : pos + arity])
        pos += arity


def _register_paint(op: Op) -> None:
    operation = PAINT_OPERATIONS[op]
    closes = op in _CLOSING_PAINTS

    @_handles(op)
    def _paint(interp: GraphicsStateInterpreter, args: Sequence[Any]) -> None:
        if closes and interp.current_path is not None and len(interp.current_path) > 0:
            interp.close_path()
        interp.paint(operation)


for _op in PAINT_OPERATIONS:
    _register_paint(_op)


def extract_paths(operators: Iterable[Operator]) -> list[Path]:
    """Replay ``operators`` with a fresh interpreter and return the painted paths."""
    return GraphicsStateInterpreter().run(operators)
