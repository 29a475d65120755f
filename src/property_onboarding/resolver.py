from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from .normalize import as_text, clean_number

logger = logging.getLogger("pob.resolver")

# Placeholder strings that mean "no value" on the read-only comparison page.
INVALID_DISPLAY_VALUES = frozenset({"", "n/a", "-", "--", "---", "null", "undefined"})


def resolve(record: Optional[Mapping[str, Any]], candidate_keys: Iterable[str]) -> Any:
    """Return the first candidate value that is not None, else "".

    0, False and "" are real values here; callers that want "meaningful value"
    semantics must check for them explicitly.
    """
    if not record:
        return ""
    for key in candidate_keys:
        value = record.get(key)
        if value is not None:
            return value
    return ""


def is_valid_display_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().casefold() not in INVALID_DISPLAY_VALUES
    return True


class FieldResolver:
    """Priority-ordered lookups over one raw record.

    The record is treated as a permissive key/value map; candidate key lists
    are always passed in explicitly.
    """

    def __init__(self, record: Optional[Mapping[str, Any]]):
        self.record: Mapping[str, Any] = record if isinstance(record, Mapping) else {}

    def get(self, keys: Sequence[str]) -> Any:
        value = resolve(self.record, keys)
        if value == "" and not self.has_any(keys):
            logger.debug("no value for any of %s", list(keys))
        return value

    def has_any(self, keys: Iterable[str]) -> bool:
        return any(self.record.get(k) is not None for k in keys)

    def text(self, keys: Sequence[str]) -> str:
        return as_text(self.get(keys))

    def number(self, keys: Sequence[str]) -> str:
        value = self.get(keys)
        cleaned = clean_number(value)
        if value not in ("", None) and not cleaned:
            logger.debug("discarding non-numeric value %r for %s", value, keys[0])
        return cleaned

    def truthy(self, keys: Sequence[str]) -> Any:
        """First candidate with a truthy value, for fields where "" or 0 mean unset."""
        for key in keys:
            value = self.record.get(key)
            if value:
                return value
        return ""
