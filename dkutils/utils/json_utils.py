"""
JSON helpers built on pydantic.

Every call builds its own frozen ``JsonCodec`` (date pattern + pretty flag), so
concurrent callers with different settings never share mutable encoder state.
Dates are written with the codec's strftime pattern; on the way back in,
strings in that pattern are accepted wherever the target type expects a date.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from functools import lru_cache
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import from_json as parse_json_value, to_json as dump_json_bytes

from .date_time_utils import resolve_date_format

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")

PRETTY_INDENT = 2


@lru_cache(maxsize=256)
def _adapter_for(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _date_error_locations(error: ValidationError) -> List[tuple]:
    return [detail["loc"] for detail in error.errors() if detail["type"].startswith("date")]


@dataclass(frozen=True)
class JsonCodec:
    date_format: str
    pretty: bool = False

    @classmethod
    def create(cls, date_format: Optional[str] = None, pretty: bool = False) -> "JsonCodec":
        return cls(resolve_date_format(date_format), pretty)

    def encode(self, value: Any) -> str:
        indent = PRETTY_INDENT if self.pretty else None
        return dump_json_bytes(self._render_dates(value), indent=indent).decode("utf-8")

    def decode(self, text: str, target: Any) -> Any:
        adapter = _adapter_for(target)
        try:
            return adapter.validate_json(text)
        except ValidationError as error:
            locations = _date_error_locations(error)
            if not locations:
                raise
            # Dates written with a custom pattern are not ISO-8601; only the
            # values pydantic rejected as dates are rewritten
            value = parse_json_value(text)
            for loc in locations:
                value = self._restore_date_at(value, loc)
            return adapter.validate_python(value)

    def _render_dates(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.strftime(self.date_format)
        if isinstance(value, date):
            return datetime.combine(value, time()).strftime(self.date_format)
        if isinstance(value, BaseModel):
            return self._render_dates(value.model_dump())
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return {
                field.name: self._render_dates(getattr(value, field.name))
                for field in dataclasses.fields(value)
            }
        if isinstance(value, Mapping):
            return {key: self._render_dates(item) for key, item in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self._render_dates(item) for item in value]
        return value

    def _to_iso(self, text: str) -> str:
        try:
            return datetime.strptime(text, self.date_format).isoformat()
        except ValueError:
            # Not in the pattern either; validation reports the original text
            return text

    def _restore_date_at(self, root: Any, loc: tuple) -> Any:
        """Rewrite the string found at an error location; returns the (possibly new) root."""
        parent, key, current = None, None, root
        for part in loc:
            if isinstance(current, dict) and part in current:
                parent, key, current = current, part, current[part]
            elif isinstance(current, list) and isinstance(part, int) and 0 <= part < len(current):
                parent, key, current = current, part, current[part]
            else:
                # Remaining parts name union members or dict keys, not positions in the data
                break

        if not isinstance(current, str):
            return root
        if parent is None:
            return self._to_iso(current)
        parent[key] = self._to_iso(current)
        return root


# ===== Encoding =====

def to_json(value: Any, date_format: Optional[str] = None, pretty: bool = False) -> Optional[str]:
    if value is None:
        return None
    return JsonCodec.create(date_format, pretty).encode(value)


def to_json_pretty(value: Any, date_format: Optional[str] = None) -> Optional[str]:
    return to_json(value, date_format, pretty=True)


def from_list_to_json(items: Optional[List[Any]], date_format: Optional[str] = None) -> Optional[str]:
    return to_json(items, date_format)


def from_list_to_json_pretty(items: Optional[List[Any]], date_format: Optional[str] = None) -> Optional[str]:
    return to_json(items, date_format, pretty=True)


# ===== Decoding =====

def from_json(text: Optional[str], target: Type[T], date_format: Optional[str] = None) -> Optional[T]:
    if text is None:
        return None
    return JsonCodec.create(date_format).decode(text, target)


def from_json_list(
    text: Optional[str], item_type: Type[T], date_format: Optional[str] = None
) -> Optional[List[T]]:
    if text is None:
        return None
    return JsonCodec.create(date_format).decode(text, List[item_type])


def from_json_map(
    text: Optional[str],
    key_type: Type[K],
    value_type: Type[V],
    date_format: Optional[str] = None,
) -> Optional[Dict[K, V]]:
    if text is None:
        return None
    return JsonCodec.create(date_format).decode(text, Dict[key_type, value_type])


def from_json_to_string(text: Optional[str], date_format: Optional[str] = None) -> Optional[str]:
    if text is None:
        return None
    return JsonCodec.create(date_format).decode(text, str)
