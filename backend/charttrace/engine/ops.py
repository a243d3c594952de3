"""Operator codes for decoded page operator streams.

Numeric values follow the pdf.js ``OPS`` table, so the ``fnArray``/``argsArray``
pair returned by ``page.getOperatorList()`` can be replayed as-is. Operators may
also be spelled with their pdf.js camelCase name (``"curveTo2"``) or their
content-stream mnemonic (``"v"``).
"""

from __future__ import annotations

import enum
from typing import Any


class Op(enum.IntEnum):
    DEPENDENCY = 1
    SET_LINE_WIDTH = 2
    SET_LINE_CAP = 3
    SET_LINE_JOIN = 4
    SET_MITER_LIMIT = 5
    SET_DASH = 6
    SET_RENDERING_INTENT = 7
    SET_FLATNESS = 8
    SET_GSTATE = 9
    SAVE = 10
    RESTORE = 11
    TRANSFORM = 12
    MOVE_TO = 13
    LINE_TO = 14
    CURVE_TO = 15
    CURVE_TO2 = 16
    CURVE_TO3 = 17
    CLOSE_PATH = 18
    RECTANGLE = 19
    STROKE = 20
    CLOSE_STROKE = 21
    FILL = 22
    EO_FILL = 23
    FILL_STROKE = 24
    EO_FILL_STROKE = 25
    CLOSE_FILL_STROKE = 26
    CLOSE_EO_FILL_STROKE = 27
    END_PATH = 28
    CLIP = 29
    EO_CLIP = 30
    BEGIN_TEXT = 31
    END_TEXT = 32
    SET_CHAR_SPACING = 33
    SET_WORD_SPACING = 34
    SET_H_SCALE = 35
    SET_LEADING = 36
    SET_FONT = 37
    SET_TEXT_RENDERING_MODE = 38
    SET_TEXT_RISE = 39
    MOVE_TEXT = 40
    SET_LEADING_MOVE_TEXT = 41
    SET_TEXT_MATRIX = 42
    NEXT_LINE = 43
    SHOW_TEXT = 44
    SHOW_SPACED_TEXT = 45
    NEXT_LINE_SHOW_TEXT = 46
    NEXT_LINE_SET_SPACING_SHOW_TEXT = 47
    SET_CHAR_WIDTH = 48
    SET_CHAR_WIDTH_AND_BOUNDS = 49
    SET_STROKE_COLOR_SPACE = 50
    SET_FILL_COLOR_SPACE = 51
    SET_STROKE_COLOR = 52
    SET_STROKE_COLOR_N = 53
    SET_FILL_COLOR = 54
    SET_FILL_COLOR_N = 55
    SET_STROKE_GRAY = 56
    SET_FILL_GRAY = 57
    SET_STROKE_RGB_COLOR = 58
    SET_FILL_RGB_COLOR = 59
    SET_STROKE_CMYK_COLOR = 60
    SET_FILL_CMYK_COLOR = 61
    SHADING_FILL = 62
    BEGIN_INLINE_IMAGE = 63
    BEGIN_IMAGE_DATA = 64
    END_INLINE_IMAGE = 65
    PAINT_X_OBJECT = 66
    MARK_POINT = 67
    MARK_POINT_PROPS = 68
    BEGIN_MARKED_CONTENT = 69
    BEGIN_MARKED_CONTENT_PROPS = 70
    END_MARKED_CONTENT = 71
    BEGIN_COMPAT = 72
    END_COMPAT = 73
    PAINT_FORM_X_OBJECT_BEGIN = 74
    PAINT_FORM_X_OBJECT_END = 75
    BEGIN_GROUP = 76
    END_GROUP = 77
    BEGIN_ANNOTATION = 80
    END_ANNOTATION = 81
    PAINT_IMAGE_MASK_X_OBJECT = 83
    PAINT_IMAGE_MASK_X_OBJECT_GROUP = 84
    PAINT_IMAGE_X_OBJECT = 85
    PAINT_INLINE_IMAGE_X_OBJECT = 86
    PAINT_INLINE_IMAGE_X_OBJECT_GROUP = 87
    PAINT_IMAGE_X_OBJECT_REPEAT = 88
    PAINT_IMAGE_MASK_X_OBJECT_REPEAT = 89
    PAINT_SOLID_COLOR_IMAGE_MASK = 90
    CONSTRUCT_PATH = 91
    SET_STROKE_TRANSPARENT = 92
    SET_FILL_TRANSPARENT = 93

    @classmethod
    def parse(cls, value: Any) -> Op | None:
        """Resolve an opcode spelling to an ``Op``. Unknown spellings give ``None``."""
        if isinstance(value, Op):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str):
            if value in _MNEMONICS:
                return _MNEMONICS[value]
            return _BY_NAME.get(_name_key(value))
        return None


def _name_key(name: str) -> str:
    return name.replace("_", "").lower()


# pdf.js camelCase and enum member names normalize to the same key
_BY_NAME: dict[str, Op] = {_name_key(op.name): op for op in Op}

# Content-stream mnemonics (case-sensitive)
_MNEMONICS: dict[str, Op] = {
    "w": Op.SET_LINE_WIDTH,
    "J": Op.SET_LINE_CAP,
    "j": Op.SET_LINE_JOIN,
    "M": Op.SET_MITER_LIMIT,
    "d": Op.SET_DASH,
    "ri": Op.SET_RENDERING_INTENT,
    "i": Op.SET_FLATNESS,
    "gs": Op.SET_GSTATE,
    "q": Op.SAVE,
    "Q": Op.RESTORE,
    "cm": Op.TRANSFORM,
    "m": Op.MOVE_TO,
    "l": Op.LINE_TO,
    "c": Op.CURVE_TO,
    "v": Op.CURVE_TO2,
    "y": Op.CURVE_TO3,
    "h": Op.CLOSE_PATH,
    "re": Op.RECTANGLE,
    "S": Op.STROKE,
    "s": Op.CLOSE_STROKE,
    "f": Op.FILL,
    "F": Op.FILL,
    "f*": Op.EO_FILL,
    "B": Op.FILL_STROKE,
    "B*": Op.EO_FILL_STROKE,
    "b": Op.CLOSE_FILL_STROKE,
    "b*": Op.CLOSE_EO_FILL_STROKE,
    "n": Op.END_PATH,
    "W": Op.CLIP,
    "W*": Op.EO_CLIP,
    "BT": Op.BEGIN_TEXT,
    "ET": Op.END_TEXT,
    "Tf": Op.SET_FONT,
    "Td": Op.MOVE_TEXT,
    "TD": Op.SET_LEADING_MOVE_TEXT,
    "Tm": Op.SET_TEXT_MATRIX,
    "T*": Op.NEXT_LINE,
    "Tj": Op.SHOW_TEXT,
    "TJ": Op.SHOW_SPACED_TEXT,
    "CS": Op.SET_STROKE_COLOR_SPACE,
    "cs": Op.SET_FILL_COLOR_SPACE,
    "G": Op.SET_STROKE_GRAY,
    "g": Op.SET_FILL_GRAY,
    "RG": Op.SET_STROKE_RGB_COLOR,
    "rg": Op.SET_FILL_RGB_COLOR,
    "K": Op.SET_STROKE_CMYK_COLOR,
    "k": Op.SET_FILL_CMYK_COLOR,
    "sh": Op.SHADING_FILL,
    "Do": Op.PAINT_X_OBJECT,
    "MP": Op.MARK_POINT,
    "DP": Op.MARK_POINT_PROPS,
    "BMC": Op.BEGIN_MARKED_CONTENT,
    "BDC": Op.BEGIN_MARKED_CONTENT_PROPS,
    "EMC": Op.END_MARKED_CONTENT,
    "BX": Op.BEGIN_COMPAT,
    "EX": Op.END_COMPAT,
}

# Coordinates consumed per sub-operator inside CONSTRUCT_PATH
SUBPATH_ARITY: dict[Op, int] = {
    Op.MOVE_TO: 2,
    Op.LINE_TO: 2,
    Op.CURVE_TO: 6,
    Op.CURVE_TO2: 4,
    Op.CURVE_TO3: 4,
    Op.CLOSE_PATH: 0,
    Op.RECTANGLE: 4,
}
