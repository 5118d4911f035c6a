"""
Validation helpers for pydantic models.

Field metadata used with ``typing.Annotated``: presence tracking for partial
updates, string normalization and enum-restricted strings.
"""

from .enum_validator import INVALID_ENUM_ERROR, EnumValidator
from .patchable import FieldPresenceModel, Patchable, patchable_fields
from .string_normalizer import StringCase, StringNormalizer, normalize_string

__all__ = [
    # Presence tracking
    "Patchable",
    "FieldPresenceModel",
    "patchable_fields",
    # Normalization
    "StringCase",
    "StringNormalizer",
    "normalize_string",
    # Enum values
    "EnumValidator",
    "INVALID_ENUM_ERROR",
]
