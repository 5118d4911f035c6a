"""
Conversions between display strings, numbers and booleans.

Numeric conversions follow fixed-width integer semantics (byte = 8 bit,
short = 16 bit, int = 32 bit, long = 64 bit) and IEEE single precision for
``to_float``. Every converter returns None when given None.
"""

import math
import re
import struct
from collections.abc import Iterable
from typing import Any, Optional, Union

from .common_utils import contains, contains_ignore_case, is_null, wrap_signed

NULL_STRING = "null"
TRUE_STRINGS = ("1", "true", "t", "yes", "y", "on")
TRUE_CHARS = ("1", "T", "t", "Y", "y")
NUL_CHAR = "\u0000"

BYTE_BITS = 8
SHORT_BITS = 16
INT_BITS = 32
LONG_BITS = 64

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)[fFdD]?"
)

Number = Union[int, float, bool]


def to_display_string(value: Any) -> str:
    if is_null(value):
        return NULL_STRING
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return array_to_string(value)
    return str(value)


def _float_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def collection_to_string(collection: Optional[Iterable]) -> str:
    return array_to_string(collection)


def array_to_string(array: Optional[Iterable]) -> str:
    if is_null(array):
        return NULL_STRING
    if isinstance(array, (bytes, bytearray)):
        array = [wrap_signed(b, BYTE_BITS) for b in array]
    return "[" + ", ".join(to_display_string(item) for item in array) + "]"


# ===== Fixed-width numbers =====

def _truncate(value: float, bits: int) -> int:
    """Float to integer: NaN becomes 0, truncation toward zero, saturation at the type bounds."""
    if math.isnan(value):
        return 0
    lower = -(1 << (bits - 1))
    upper = (1 << (bits - 1)) - 1
    if math.isinf(value):
        return upper if value > 0 else lower
    return max(lower, min(upper, math.trunc(value)))


def _to_integral(value: Optional[Number], bits: int) -> Optional[int]:
    if is_null(value):
        return None
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, float):
        # Narrow types first go through a 32-bit int, wide types through 64-bit
        return wrap_signed(_truncate(value, max(bits, INT_BITS)), bits)
    return wrap_signed(int(value), bits)


def to_byte(value: Optional[Number]) -> Optional[int]:
    return _to_integral(value, BYTE_BITS)


def to_short(value: Optional[Number]) -> Optional[int]:
    return _to_integral(value, SHORT_BITS)


def to_int(value: Optional[Number]) -> Optional[int]:
    return _to_integral(value, INT_BITS)


def to_long(value: Optional[Number]) -> Optional[int]:
    return _to_integral(value, LONG_BITS)


def to_float(value: Optional[Number]) -> Optional[float]:
    """Round to IEEE single precision."""
    if is_null(value):
        return None
    as_double = float(value)
    try:
        return struct.unpack("f", struct.pack("f", as_double))[0]
    except OverflowError:
        return math.copysign(math.inf, as_double)


def to_double(value: Optional[Number]) -> Optional[float]:
    if is_null(value):
        return None
    return float(value)


# ===== Booleans =====

def to_boolean(value: Optional[Number]) -> bool:
    """True only when the number equals one."""
    if is_null(value):
        return False
    return value == 1


def char_to_boolean(value: Optional[str]) -> bool:
    if is_null(value):
        return False
    return value in TRUE_CHARS


def string_to_boolean(value: Optional[str]) -> bool:
    return contains(TRUE_STRINGS, value)


def string_to_boolean_ignore_case(value: Optional[str]) -> bool:
    return contains_ignore_case(TRUE_STRINGS, value)


# ===== String parsing =====

def _parse_integral(value: Optional[str], bits: int) -> int:
    if is_null(value) or not _INTEGER_PATTERN.fullmatch(value):
        return 0
    parsed = int(value)
    if not -(1 << (bits - 1)) <= parsed < 1 << (bits - 1):
        return 0
    return parsed


def _parse_decimal(value: Optional[str]) -> float:
    if is_null(value):
        return 0.0
    text = value.strip()
    if not _DECIMAL_PATTERN.fullmatch(text):
        return 0.0
    if text[-1] in "fFdD":
        text = text[:-1]
    return float(text.replace("Infinity", "inf"))


def string_to_byte(value: Optional[str]) -> int:
    return _parse_integral(value, BYTE_BITS)


def string_to_short(value: Optional[str]) -> int:
    return _parse_integral(value, SHORT_BITS)


def string_to_int(value: Optional[str]) -> int:
    return _parse_integral(value, INT_BITS)


def string_to_long(value: Optional[str]) -> int:
    return _parse_integral(value, LONG_BITS)


def string_to_float(value: Optional[str]) -> float:
    return to_float(_parse_decimal(value))


def string_to_double(value: Optional[str]) -> float:
    return _parse_decimal(value)


def string_to_char(value: Optional[str]) -> str:
    return value[0] if value else NUL_CHAR


def string_to_character(value: Optional[str]) -> Optional[str]:
    return value[0] if value else None
