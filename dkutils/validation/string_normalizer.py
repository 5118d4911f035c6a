from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..utils.common_utils import EMPTY_STRING, capitalize


class StringCase(str, Enum):
    NONE = "NONE"
    UPPER = "UPPER"
    LOWER = "LOWER"


@dataclass(frozen=True)
class StringNormalizer:
    """
    Normalization options for incoming strings.

    Usable directly through ``normalize_string(value, config)`` or as field
    metadata on a pydantic model, where it runs before validation:

        name: Annotated[Optional[str], StringNormalizer(case_conversion=StringCase.UPPER)]
    """

    trim: bool = True
    null_if_empty: bool = False
    case_conversion: StringCase = StringCase.NONE
    capitalize: bool = False

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_before_validator_function(
            self._normalize_input, handler(source_type)
        )

    def _normalize_input(self, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return normalize_string(value, self)
        return value


DEFAULT_NORMALIZER = StringNormalizer()


def normalize_string(value: Optional[str], config: StringNormalizer = DEFAULT_NORMALIZER) -> Optional[str]:
    """Apply trim, then null-if-empty, then capitalize, then case conversion."""
    if value is None:
        return None
    if config.trim:
        value = value.strip()
    if config.null_if_empty and value == EMPTY_STRING:
        return None
    if config.capitalize:
        value = capitalize(value)
    if config.case_conversion is StringCase.UPPER:
        return value.upper()
    if config.case_conversion is StringCase.LOWER:
        return value.lower()
    return value
