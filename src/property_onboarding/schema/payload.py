from __future__ import annotations

import json
import logging
import pathlib
from functools import lru_cache
from typing import Any, Dict, Mapping

from jsonschema import Draft7Validator

logger = logging.getLogger("pob.schema")

SCHEMA_DIR = pathlib.Path(__file__).parent


@lru_cache(maxsize=None)
def load_schema(variant: str) -> Dict[str, Any]:
    path = SCHEMA_DIR / f"payload_{variant}.json"
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def validate_payload(payload: Mapping[str, Any], variant: str) -> Dict[str, str]:
    """Validate a payload against its variant's schema.

    Returns a map of payload path (dotted, `$` for the root) to message;
    empty when the payload is valid.
    """
    validator = Draft7Validator(load_schema(str(variant)))
    errors: Dict[str, str] = {}
    for error in sorted(validator.iter_errors(dict(payload)), key=lambda e: [str(p) for p in e.absolute_path]):
        path = ".".join(str(p) for p in error.absolute_path) or "$"
        errors.setdefault(path, error.message)
    return errors
