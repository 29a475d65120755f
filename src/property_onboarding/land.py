"""Land area, open space and buildup area reconciliation.

Records whose RERA number carries the metric prefix are entered in square
metres. Storage always holds acres for land, sqft for buildup and a
percentage for open space; the sqmt values only exist on the form.

Legacy metric records are ambiguous: some stored the raw sqmt value in the
land-area column. A value below `LEGACY_SQMT_THRESHOLD` is taken to be
acres already, anything larger is taken to be raw sqmt. Large acreages or
tiny plots can be misclassified; records carry no migration marker that
would settle it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .enums import LandUnitSystem
from .normalize import clean_number, format_number, to_float
from .settings import get_settings
from .units import acres_to_sqmt, sqft_to_sqmt, sqmt_to_acres, sqmt_to_sqft

logger = logging.getLogger("pob.land")

LEGACY_SQMT_THRESHOLD = 1000
OPEN_SPACE_ABSOLUTE_THRESHOLD = 100


def is_metric_rera(rera_number: Any, *, prefix: Optional[str] = None) -> bool:
    if not rera_number:
        return False
    if prefix is None:
        prefix = get_settings().metric_rera_prefix
    return str(rera_number).startswith(prefix)


def unit_system_for(rera_number: Any) -> str:
    if is_metric_rera(rera_number):
        return LandUnitSystem.SQMT.value
    return LandUnitSystem.ACRES.value


@dataclass(frozen=True)
class AreaFields:
    total_land_area: str = ""
    total_land_area_sqmt: str = ""
    open_space: str = ""
    open_space_sqmt: str = ""
    total_buildup_area: str = ""
    total_buildup_area_sqmt: str = ""
    land_unit_system: str = LandUnitSystem.ACRES.value


def _positive(value: Any) -> Optional[float]:
    parsed = to_float(value)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def areas_from_store(rera_number: Any, land: Any, open_space: Any, buildup: Any) -> AreaFields:
    """Build the form's area fields from stored values."""
    if not is_metric_rera(rera_number):
        return AreaFields(
            total_land_area=clean_number(land),
            open_space=clean_number(open_space),
            total_buildup_area=clean_number(buildup),
        )

    land_acres = ""
    land_sqmt = ""
    land_sqmt_value: Optional[float] = None
    stored_land = _positive(land)
    if stored_land is not None:
        if stored_land < LEGACY_SQMT_THRESHOLD:
            land_acres = format_number(stored_land, 4)
            land_sqmt_value = acres_to_sqmt(land_acres)
        else:
            logger.debug("treating land area %r as legacy sqmt", land)
            land_sqmt_value = stored_land
            land_acres = format_number(sqmt_to_acres(stored_land), 4)
        land_sqmt = format_number(land_sqmt_value, 2)
    elif land not in (None, ""):
        land_acres = clean_number(land)

    open_pct = ""
    open_sqmt = ""
    stored_open = _positive(open_space)
    if stored_open is not None:
        if stored_open > OPEN_SPACE_ABSOLUTE_THRESHOLD:
            open_sqmt = format_number(stored_open, 2)
            if land_sqmt_value:
                open_pct = format_number(stored_open / land_sqmt_value * 100, 2)
        else:
            open_pct = format_number(stored_open, 2)
            if land_sqmt_value:
                open_sqmt = format_number(land_sqmt_value * stored_open / 100, 2)
    elif open_space not in (None, ""):
        open_pct = clean_number(open_space)

    buildup_sqft = ""
    buildup_sqmt = ""
    stored_buildup = _positive(buildup)
    if stored_buildup is not None:
        buildup_sqft = format_number(stored_buildup, 2)
        buildup_sqmt = format_number(sqft_to_sqmt(stored_buildup), 2)
    elif buildup not in (None, ""):
        buildup_sqft = clean_number(buildup)

    return AreaFields(
        total_land_area=land_acres,
        total_land_area_sqmt=land_sqmt,
        open_space=open_pct,
        open_space_sqmt=open_sqmt,
        total_buildup_area=buildup_sqft,
        total_buildup_area_sqmt=buildup_sqmt,
        land_unit_system=LandUnitSystem.SQMT.value,
    )


def _number(value: Any) -> Any:
    parsed = to_float(value)
    if parsed is None:
        return None
    return int(parsed) if parsed.is_integer() else parsed


def _rounded(value: float, places: int) -> Any:
    return _number(format_number(value, places))


def areas_to_store(rera_number: Any, basics: Any, construction: Any) -> Dict[str, Any]:
    """Convert the form's area fields to stored numbers.

    Returns `{"land": acres, "open_space": percentage, "buildup": sqft}`,
    each a number or None.
    """
    if not is_metric_rera(rera_number):
        return {
            "land": _number(basics.total_land_area),
            "open_space": _number(basics.open_space),
            "buildup": _number(construction.total_buildup_area),
        }

    land_sqmt = _positive(basics.total_land_area_sqmt)
    if land_sqmt is not None:
        land = _rounded(sqmt_to_acres(land_sqmt), 4)
    else:
        land = _number(basics.total_land_area)

    open_sqmt = _positive(basics.open_space_sqmt)
    if open_sqmt is not None and land_sqmt is not None:
        open_space = _rounded(open_sqmt / land_sqmt * 100, 2)
    else:
        open_space = _number(basics.open_space)
        if open_space is not None:
            open_space = _rounded(float(open_space), 2)

    buildup_sqmt = _positive(construction.total_buildup_area_sqmt)
    current_sqft = _positive(construction.total_buildup_area)
    if buildup_sqmt is None:
        buildup = _number(construction.total_buildup_area)
    elif current_sqft is not None and format_number(sqft_to_sqmt(current_sqft), 2) == format_number(buildup_sqmt, 2):
        # sqmt unchanged since load; keep the stored sqft exactly
        buildup = _rounded(current_sqft, 2)
    else:
        buildup = _rounded(sqmt_to_sqft(buildup_sqmt), 2)

    return {"land": land, "open_space": open_space, "buildup": buildup}
