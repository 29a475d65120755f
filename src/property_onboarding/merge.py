from __future__ import annotations

import copy
import logging
from typing import Any, Optional

from pydantic import BaseModel

from .land import unit_system_for
from .schema.form import SECTION_NAMES, FormModel

logger = logging.getLogger("pob.merge")


def is_empty(value: Any) -> bool:
    """Unset for merge purposes: None, "", False, empty containers, or a
    sub-model whose fields are all unset."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, BaseModel):
        return all(is_empty(getattr(value, name)) for name in type(value).model_fields)
    return False


def _merge_section(existing: BaseModel, incoming: BaseModel) -> BaseModel:
    updates = {}
    for name in type(existing).model_fields:
        if is_empty(getattr(existing, name)):
            updates[name] = copy.deepcopy(getattr(incoming, name))
    return existing.model_copy(update=updates, deep=True)


def merge_preserving_existing(existing: Optional[FormModel], incoming: Optional[FormModel]) -> FormModel:
    """Merge a freshly fetched record into an in-progress form.

    Per field, a non-empty existing value wins; `units` is replaced by the
    incoming value wholesale. The land unit system follows the merged RERA
    number.
    """
    if existing is None:
        return incoming if incoming is not None else FormModel()
    if incoming is None:
        return existing

    merged = {}
    for name in SECTION_NAMES:
        if name == "units":
            merged[name] = incoming.units.model_copy(deep=True)
        else:
            merged[name] = _merge_section(getattr(existing, name), getattr(incoming, name))

    result = FormModel(**merged)
    result.basics.land_unit_system = unit_system_for(result.basics.rera_number)
    logger.debug("merged fetched record into %r", result.basics.project_name)
    return result
