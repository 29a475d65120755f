"""Unit-type grouping and the flat `configurations` array.

The nested `unit_types` mapping is the only owned representation; the flat
array is always derived from it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping

from .enums import SoldOutStatus
from .normalize import as_text, clean_number, normalize_unit_type, to_number

logger = logging.getLogger("pob.configurations")

DEFAULT_SIZE_UNIT = "Sq ft"
VILLA_SIZE_KEYS = ("sizeSqFt", "sizeSqYd")


def parse_configurations(raw: Any) -> List[Mapping[str, Any]]:
    """Accept a list of dicts or a JSON-encoded list; anything else is empty."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.debug("configurations is not valid JSON: %r", raw[:80])
            return []
    if isinstance(raw, Mapping):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        logger.debug("ignoring configurations of type %s", type(raw).__name__)
        return []
    return [c for c in raw if isinstance(c, Mapping)]


def _sold_out_status(config: Mapping[str, Any]) -> str:
    raw = config.get("configSoldOutStatus") or config.get("configsoldoutstatus") or ""
    if str(raw).strip().lower() == SoldOutStatus.SOLD_OUT.value:
        return SoldOutStatus.SOLD_OUT.value
    return SoldOutStatus.ACTIVE.value


def _first(config: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = config.get(key)
        if value is not None:
            return value
    return None


def unit_types_from_configurations(raw: Any) -> Dict[str, Any]:
    """Group flat configuration rows by normalized unit type.

    A row is Villa-shaped when it has a `sizeSqFt` or `sizeSqYd` key.
    Every group that appears is enabled.
    """
    from .schema.form import UnitTypeEntry, UnitVariant

    unit_types: Dict[str, UnitTypeEntry] = {}
    for config in parse_configurations(raw):
        unit_type = normalize_unit_type(config.get("type"))
        if not unit_type:
            logger.debug("skipping configuration without a type: %r", config)
            continue
        entry = unit_types.setdefault(unit_type, UnitTypeEntry(enabled=True))

        common = {
            "parking_slots": clean_number(_first(config, "No_of_car_Parking", "no_of_car_parking", "parkingSlots")),
            "facing": as_text(config.get("facing")),
            "uds": clean_number(_first(config, "uds", "UDS")),
            "config_sold_out_status": _sold_out_status(config),
        }
        if any(key in config for key in VILLA_SIZE_KEYS):
            variant = UnitVariant(
                size_sq_ft=clean_number(config.get("sizeSqFt")),
                size_sq_yd=clean_number(config.get("sizeSqYd")),
                **common,
            )
        else:
            variant = UnitVariant(
                size=clean_number(_first(config, "sizeRange", "size")),
                size_unit=as_text(config.get("sizeUnit")) or DEFAULT_SIZE_UNIT,
                **common,
            )
        entry.variants.append(variant)
    return unit_types


def _active_variants(unit_types: Mapping[str, Any]) -> Iterable[tuple]:
    for unit_type, entry in unit_types.items():
        if not entry.enabled or not entry.variants:
            continue
        for variant in entry.variants:
            yield unit_type, variant


def derive_configurations(unit_types: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Flat form-side rows; disabled types and empty variant lists are dropped."""
    rows: List[Dict[str, Any]] = []
    for unit_type, variant in _active_variants(unit_types):
        row: Dict[str, Any] = {
            "type": unit_type,
            "No_of_car_Parking": variant.parking_slots,
            "configSoldOutStatus": variant.config_sold_out_status or SoldOutStatus.ACTIVE.value,
            "facing": variant.facing,
        }
        if variant.is_villa:
            row["sizeSqFt"] = variant.size_sq_ft or ""
            row["sizeSqYd"] = variant.size_sq_yd or ""
            row["sizeUnit"] = DEFAULT_SIZE_UNIT
        else:
            row["sizeRange"] = variant.size or ""
            row["sizeUnit"] = variant.size_unit or DEFAULT_SIZE_UNIT
        if variant.uds != "":
            row["uds"] = variant.uds
        rows.append(row)
    return rows


def configurations_to_store(unit_types: Mapping[str, Any], variant: str) -> List[Dict[str, Any]]:
    """Payload rows with numeric sizes.

    The current store wants compact type labels ("2BHK") and a lower-case
    sold-out key; the legacy store keeps the form labels.
    """
    rows: List[Dict[str, Any]] = []
    for row in derive_configurations(unit_types):
        out: Dict[str, Any] = {
            "type": row["type"].replace(" BHK", "BHK") if variant == "current" else row["type"],
            "No_of_car_Parking": to_number(row["No_of_car_Parking"]),
            "facing": row["facing"],
            "sizeUnit": row["sizeUnit"],
        }
        for key in ("sizeSqFt", "sizeSqYd", "sizeRange"):
            if key in row:
                out[key] = to_number(row[key])
        if "uds" in row:
            uds = to_number(row["uds"])
            if uds is not None:
                out["uds"] = uds
        sold_out_key = "configsoldoutstatus" if variant == "current" else "configSoldOutStatus"
        out[sold_out_key] = row["configSoldOutStatus"]
        rows.append(out)
    return rows
