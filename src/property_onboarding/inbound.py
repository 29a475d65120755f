"""Raw persisted record -> canonical `FormModel`.

Accepts records in either storage convention (or a mixture) and never
raises on malformed data: unknown values fall back to documented defaults
and missing values become empty strings.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from .configurations import unit_types_from_configurations
from .enums import (
    ConstructionStatus,
    amenities_from_store,
    community_type_from_store,
    construction_material_from_store,
    construction_status_from_store,
    power_backup_from_store,
    project_type_from_store,
)
from .fields import FLAG, LIST, NUMBER, YESNO, field_for, plain_fields
from .land import areas_from_store
from .normalize import as_text
from .poc import is_yes, pocs_from_record, registration_from_record
from .resolver import FieldResolver
from .schema.form import SECTION_NAMES, FormModel
from .status import derive_construction_status
from .units import RTM, format_display_date

logger = logging.getLogger("pob.inbound")


def is_canonical(raw: Any) -> bool:
    """True for data already in form shape (section mappings at the top level)."""
    if isinstance(raw, FormModel):
        return True
    if not isinstance(raw, Mapping):
        return False
    return any(isinstance(raw.get(name), Mapping) for name in SECTION_NAMES)


def as_list(value: Any) -> List[str]:
    """List fields arrive as lists, JSON strings or comma-separated text."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except ValueError:
                logger.debug("list field is not valid JSON: %r", text[:80])
                value = text.strip("[]").split(",")
        else:
            value = text.split(",")
    if not isinstance(value, (list, tuple)):
        value = [value]
    items = [as_text(v).strip() for v in value if v is not None]
    return [item for item in items if item]


def _plain_value(fields: FieldResolver, kind: str, candidates) -> Any:
    if kind == NUMBER:
        return fields.number(candidates)
    if kind == LIST:
        return as_list(fields.get(candidates))
    if kind == YESNO:
        return fields.text(candidates).strip().lower()
    if kind == FLAG:
        return is_yes(fields.get(candidates))
    return fields.text(candidates)


def _sections(fields: FieldResolver) -> Dict[str, Dict[str, Any]]:
    sections: Dict[str, Dict[str, Any]] = {name: {} for name in SECTION_NAMES}
    for spec in plain_fields():
        sections[spec.section][spec.name] = _plain_value(fields, spec.kind, spec.candidates)
    return sections


def _construction_status(
    stored: Any, possession_date: str, *, today: Optional[date]
) -> str:
    derived = derive_construction_status(possession_date, today=today)
    if derived:
        return derived
    status = construction_status_from_store(stored)
    if status:
        return status
    return ConstructionStatus.UNDER_CONSTRUCTION.value


def normalize(raw: Any, *, today: Optional[date] = None) -> FormModel:
    """Build the canonical form model from a raw property record."""

    if isinstance(raw, FormModel):
        return raw.model_copy(deep=True)
    if is_canonical(raw):
        return FormModel.model_validate(raw)
    if not isinstance(raw, Mapping):
        logger.debug("normalize got %s, returning an empty form", type(raw).__name__)
        return FormModel()

    fields = FieldResolver(raw)
    sections = _sections(fields)
    basics = sections["basics"]
    construction = sections["construction"]

    def lookup(name: str) -> Any:
        return fields.get(field_for(name).candidates)

    basics["project_type"] = project_type_from_store(lookup("project_type"))
    basics["community_type"] = community_type_from_store(lookup("community_type"))

    stored_status = lookup("construction_status")
    possession = format_display_date(lookup("possession_date"))
    if not possession and construction_status_from_store(stored_status) == ConstructionStatus.RTM:
        possession = RTM
    basics["possession_date"] = possession
    basics["launch_date"] = format_display_date(lookup("launch_date"))
    basics["construction_status"] = _construction_status(stored_status, possession, today=today)

    areas = areas_from_store(
        basics["rera_number"],
        lookup("total_land_area"),
        lookup("open_space"),
        lookup("total_buildup_area"),
    )
    basics.update(
        total_land_area=areas.total_land_area,
        total_land_area_sqmt=areas.total_land_area_sqmt,
        open_space=areas.open_space,
        open_space_sqmt=areas.open_space_sqmt,
        land_unit_system=areas.land_unit_system,
    )
    construction.update(
        total_buildup_area=areas.total_buildup_area,
        total_buildup_area_sqmt=areas.total_buildup_area_sqmt,
        power_backup=power_backup_from_store(lookup("power_backup")),
        construction_material=construction_material_from_store(lookup("construction_material")),
        external_amenities=as_text(lookup("external_amenities")),
        amenities=amenities_from_store(as_list(lookup("amenities"))),
    )

    sections["units"] = {
        "unit_types": unit_types_from_configurations(
            fields.get(("configurations", "Configurations"))
        )
    }
    sections["secondary"].update(registration_from_record(raw))
    sections["secondary"]["poc_details"] = pocs_from_record(raw)

    logger.debug(
        "normalized record %r (%d unit types)",
        basics["project_name"] or basics["rera_number"],
        len(sections["units"]["unit_types"]),
    )
    return FormModel.model_validate(sections)
