"""General purpose helpers: null/empty checks, string helpers, random values and arithmetic."""

import math
import random
import re
import string
from collections.abc import Iterable, Mapping, Sized
from typing import Any, Optional, Union

EMPTY_STRING = ""

_FULL_STOP = r"\."
_DEFAULT_RANDOM_STRING_LENGTH = 10
_DEFAULT_RANDOM_INT_MIN = 0
_DEFAULT_RANDOM_INT_MAX = 10000
_INT_BITS = 32

Number = Union[int, float]


def is_null(value: Any) -> bool:
    return value is None


def is_not_null(value: Any) -> bool:
    return not is_null(value)


def is_empty(value: Any) -> bool:
    """True for None or any sized value (str, list, dict, tuple, ...) of length 0."""
    if is_null(value):
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_not_empty(value: Any) -> bool:
    return not is_empty(value)


def is_empty_return_null(value: Optional[str]) -> Optional[str]:
    return None if is_empty(value) else value.strip()


def default_if_empty(value: Optional[str], default: Optional[str]) -> Optional[str]:
    return default if is_empty(value) else value


def is_strings_equal(first: Optional[str], second: Optional[str]) -> bool:
    if is_null(first) or is_null(second):
        return False
    return first.strip() == second.strip()


def is_strings_not_equal(first: Optional[str], second: Optional[str]) -> bool:
    return not is_strings_equal(first, second)


def is_strings_equal_ignore_case(first: Optional[str], second: Optional[str]) -> bool:
    if is_null(first) or is_null(second):
        return False
    return first.strip().lower() == second.strip().lower()


def is_strings_not_equal_ignore_case(first: Optional[str], second: Optional[str]) -> bool:
    return not is_strings_equal_ignore_case(first, second)


def contains(container: Any, item: Any) -> bool:
    """Substring check for strings, membership check for any other container."""
    if is_null(container) or is_null(item):
        return False
    if isinstance(container, str):
        return isinstance(item, str) and item in container
    return item in container


def contains_key(data: Optional[Mapping], key: Any) -> bool:
    if is_null(data) or is_null(key):
        return False
    return key in data


def contains_value(data: Optional[Mapping], value: Any) -> bool:
    if is_null(data) or is_null(value):
        return False
    return value in data.values()


def contains_ignore_case(container: Union[str, Iterable[str], None], item: Optional[str]) -> bool:
    if is_null(container) or is_null(item):
        return False
    if isinstance(container, str):
        return item.lower() in container.lower()
    wanted = item.lower()
    return any(candidate.lower() == wanted for candidate in container)


def is_not_contains(container: Any, item: Any) -> bool:
    return not contains(container, item)


def is_not_contains_key(data: Optional[Mapping], key: Any) -> bool:
    return not contains_key(data, key)


def is_not_contains_value(data: Optional[Mapping], value: Any) -> bool:
    return not contains_value(data, value)


def is_not_contains_ignore_case(container: Union[str, Iterable[str], None], item: Optional[str]) -> bool:
    return not contains_ignore_case(container, item)


def find_first_letter_index(source: Optional[str]) -> int:
    if is_null(source):
        return -1
    for index, char in enumerate(source):
        if char.isalpha():
            return index
    return -1


def find_first_index(source: Optional[str], search: Optional[str]) -> int:
    if is_null(source) or is_null(search):
        return -1
    return source.find(search)


def capitalize(value: Optional[str], separator: Optional[str] = None) -> Optional[str]:
    """
    Upper-case the first letter of every segment and join the segments.

    Without a separator the value is split on "." and the dots are dropped:
    "hello.world" becomes "HelloWorld". With a separator (a regular expression)
    the value is split on it, the separator is dropped and the first character
    of each segment is upper-cased: capitalize("helloWorld", "W") == "HelloOrld".
    """
    if is_empty(value):
        return value

    parts = []
    if separator is None:
        for segment in re.split(_FULL_STOP, value):
            index = find_first_letter_index(segment)
            if index == -1:
                parts.append(segment)
                continue
            parts.append(segment[:index] + segment[index].upper() + segment[index + 1:])
    else:
        for segment in re.split(separator, value):
            if segment:
                parts.append(segment[0].upper() + segment[1:])
    return EMPTY_STRING.join(parts)


def reverse(value: Optional[str]) -> Optional[str]:
    if is_empty(value):
        return value
    return value[::-1]


def convert_if_null_to_empty(value: Optional[str]) -> str:
    return EMPTY_STRING if is_null(value) else value


def convert_if_empty_to_null(value: Optional[str]) -> Optional[str]:
    return None if is_empty(value) else value


# ===== Random values =====

def random_string(
    length: int = _DEFAULT_RANDOM_STRING_LENGTH,
    prefix: Optional[str] = None,
    suffix: Optional[str] = None,
) -> str:
    body = "".join(random.choice(string.ascii_lowercase) for _ in range(length))
    return convert_if_null_to_empty(prefix) + body + convert_if_null_to_empty(suffix)


def random_int(
    min_value: int = _DEFAULT_RANDOM_INT_MIN,
    max_value: int = _DEFAULT_RANDOM_INT_MAX,
) -> int:
    """Random integer in [min_value, max_value)."""
    if min_value < _DEFAULT_RANDOM_INT_MIN or max_value < 0:
        raise ValueError("Min and Max must be non-negative")
    if min_value >= max_value:
        raise ValueError("Min must be less than Max")
    return random.randrange(min_value, max_value)


# ===== Arithmetic =====

def _require_operands(first: Optional[Number], second: Optional[Number]) -> None:
    if is_null(first) or is_null(second):
        raise ValueError("Arguments must not be null")


def _is_integral(first: Number, second: Number) -> bool:
    return isinstance(first, int) and isinstance(second, int)


def wrap_signed(value: int, bits: int) -> int:
    """Two's-complement wrap of an integer into a signed field of the given width."""
    mask = (1 << bits) - 1
    value &= mask
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _as_int32(result: Number) -> Number:
    # Integer results overflow like a 32-bit int; floats are left alone
    return wrap_signed(result, _INT_BITS) if isinstance(result, int) else result


def sum_values(*numbers: Optional[Number]) -> Number:
    """Sum of all non-None arguments; 0 when there are none. Integer sums wrap at 32 bits."""
    return _as_int32(sum(number for number in numbers if is_not_null(number)))


def subtract(first: Optional[Number], second: Optional[Number]) -> Number:
    _require_operands(first, second)
    return _as_int32(first - second)


def multiply(first: Optional[Number], second: Optional[Number]) -> Number:
    _require_operands(first, second)
    return _as_int32(first * second)


def divide(first: Optional[Number], second: Optional[Number]) -> Number:
    """Integer operands truncate toward zero and wrap at 32 bits, like C and Java."""
    _require_operands(first, second)
    if second == 0:
        raise ZeroDivisionError("Division by zero is not allowed")
    if _is_integral(first, second):
        quotient = abs(first) // abs(second)
        return _as_int32(quotient if (first < 0) == (second < 0) else -quotient)
    return first / second


def modulus(first: Optional[Number], second: Optional[Number]) -> Number:
    """Remainder that takes the sign of the dividend."""
    _require_operands(first, second)
    if second == 0:
        raise ZeroDivisionError("Division by zero is not allowed")
    if _is_integral(first, second):
        return _as_int32(first - second * divide(first, second))
    return math.fmod(first, second)


def max_value(*numbers: Optional[Number]) -> Number:
    if is_empty(numbers):
        raise ValueError("Array must not be null or empty")
    present = [number for number in numbers if is_not_null(number)]
    if not present:
        raise ValueError("Array must contain at least one non-null value")
    return max(present)
