from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Type

from pydantic import GetCoreSchemaHandler
from pydantic_core import PydanticCustomError, core_schema

from ..utils.common_utils import is_empty, is_strings_equal_ignore_case
from ..utils.type_converter import array_to_string

INVALID_ENUM_ERROR = "invalid_enum"


@dataclass(frozen=True)
class EnumValidator:
    """
    Restricts a string field to the members of an enum.

    Matching is trimmed and case-insensitive against member names and string
    values. None passes (combine with a required field to forbid it); empty
    strings and unknown values fail validation with error type
    ``invalid_enum``, whose context carries ``response_code`` and
    ``allowed_values``.

        status: Annotated[Optional[str], EnumValidator(Status, response_code="ERR07")] = None
    """

    enum_class: Type[Enum]
    response_code: str = "ERR01"
    message: str = "Invalid value for enum"

    @property
    def allowed_values(self) -> List[str]:
        return [member.name for member in self.enum_class]

    def _candidates(self, member: Enum) -> List[str]:
        candidates = [member.name]
        if isinstance(member.value, str):
            candidates.append(member.value)
        return candidates

    def is_valid(self, value: Optional[str]) -> bool:
        if value is None:
            return True
        if is_empty(value.strip()):
            return False
        return any(
            is_strings_equal_ignore_case(value, candidate)
            for member in self.enum_class
            for candidate in self._candidates(member)
        )

    def validate(self, value: Optional[str]) -> Optional[str]:
        if not self.is_valid(value):
            raise PydanticCustomError(
                INVALID_ENUM_ERROR,
                "{message}, allowed values: {allowed_values}",
                {
                    "message": self.message,
                    "response_code": self.response_code,
                    "allowed_values": array_to_string(self.allowed_values),
                },
            )
        return value

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(self.validate, handler(source_type))
