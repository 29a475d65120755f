"""Canonical form model and persistence payload schemas."""

from .form import (
    FormModel,
    PocEntry,
    RegistrationChannel,
    UnitTypeEntry,
    UnitVariant,
)
from .payload import load_schema, validate_payload

__all__ = [
    "FormModel",
    "PocEntry",
    "RegistrationChannel",
    "UnitTypeEntry",
    "UnitVariant",
    "load_schema",
    "validate_payload",
]
