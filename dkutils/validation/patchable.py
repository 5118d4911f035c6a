"""
Field-presence tracking for partial updates.

A field annotated with ``Patchable()`` on a ``FieldPresenceModel`` remembers
whether the incoming payload contained it, so "absent" and "explicitly null"
can be told apart:

    class UserPatch(FieldPresenceModel):
        username: Annotated[Optional[str], Patchable()] = None
        bio: Annotated[Optional[str], Patchable()] = None

    patch = UserPatch.model_validate_json('{"bio": null}')
    patch.is_field_present("bio")       # True
    patch.is_field_present("username")  # False
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Type

from pydantic import BaseModel, PrivateAttr


@dataclass(frozen=True)
class Patchable:
    """Marker for fields whose presence in the payload is tracked."""


@lru_cache(maxsize=None)
def patchable_fields(model_class: Type[BaseModel]) -> FrozenSet[str]:
    """Names of the Patchable fields of a model class, computed once per class."""
    return frozenset(
        name
        for name, field_info in model_class.model_fields.items()
        if any(isinstance(item, Patchable) for item in field_info.metadata)
    )


class FieldPresenceModel(BaseModel):
    _field_presence: Dict[str, bool] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        # model_fields_set holds every field given in the input, null or not
        for name in patchable_fields(type(self)):
            self._field_presence[name] = name in self.model_fields_set

    def mark_field(self, field_name: str, is_present: bool) -> None:
        # Rebind rather than mutate: model_copy() shares private values with the original
        self._field_presence = {**self._field_presence, field_name: is_present}

    def is_field_present(self, field_name: str) -> bool:
        return self._field_presence.get(field_name, False)
