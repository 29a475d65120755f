"""Canonical `FormModel` -> flat persistence payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .configurations import configurations_to_store
from .enums import (
    PayloadVariant,
    community_type_to_store,
    construction_material_to_store,
    construction_status_to_store,
    external_amenities_to_store,
    project_type_to_store,
)
from .fields import FLAG, LIST, NUMBER, REQUIRED_FIELDS, field_for, plain_fields
from .land import areas_to_store
from .normalize import to_number
from .poc import pocs_to_store, registration_to_store, yes_no
from .schema.form import FormModel
from .schema.payload import validate_payload
from .settings import get_settings
from .units import RTM, ddmmyyyy_to_iso, is_rtm

logger = logging.getLogger("pob.outbound")

SUBMITTED = "Submitted"

# Sub-fields only written when their applicable flag is set.
CHARGE_GROUPS = {
    "floor_rise_charges": ("floor_rise_amount_per_floor", "floor_rise_applicable_above_floor_no"),
    "facing_charges": ("facing_charges_amount",),
    "preferential_location_charges": ("preferential_location_charges_conditions",),
}
_CHARGE_SUBFIELDS = {name for names in CHARGE_GROUPS.values() for name in names}

_REQUIRED_MESSAGES = {
    "project_name": "Project name is required",
    "builder_name": "Builder name is required",
    "rera_number": "RERA number is required",
}

VariantLike = Union[str, PayloadVariant]


@dataclass(frozen=True)
class SubmissionResult:
    variant: str
    payload: Dict[str, Any]
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ready(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "variant": self.variant,
            "ready": self.ready,
            "payload": dict(self.payload),
            "errors": dict(self.errors),
        }


def _as_model(model: Union[FormModel, Mapping[str, Any]]) -> FormModel:
    if isinstance(model, FormModel):
        return model
    return FormModel.model_validate(model)


def _date_to_store(value: str, variant: PayloadVariant) -> Optional[str]:
    if is_rtm(value):
        return RTM if variant == PayloadVariant.LEGACY else None
    iso = ddmmyyyy_to_iso(value)
    if not iso and value:
        logger.debug("dropping unparseable date %r", value)
    return iso or None


def _plain_value(kind: str, value: Any) -> Any:
    if kind == NUMBER:
        return to_number(value)
    if kind == LIST:
        return list(value)
    if kind == FLAG:
        return yes_no(bool(value))
    return value


def serialize(model: Union[FormModel, Mapping[str, Any]], variant: VariantLike = PayloadVariant.LEGACY) -> Dict[str, Any]:
    """Flatten the form model into the payload for `variant`.

    Lossy defaults: an empty project type is stored as Apartment, the
    legacy store has no "Villa Apartment" and gets "Villa", an empty
    community type is stored as "Gated Community", unknown materials become
    Concrete, unmapped external amenities are dropped, and charge
    sub-fields are omitted unless their flag is set.
    """
    form = _as_model(model)
    variant = PayloadVariant.coerce(variant)
    legacy = variant == PayloadVariant.LEGACY

    payload: Dict[str, Any] = {}
    for spec in plain_fields():
        if spec.name in _CHARGE_SUBFIELDS or spec.name == "project_brochure":
            continue
        section = getattr(form, spec.section)
        payload[spec.key_for(variant)] = _plain_value(spec.kind, getattr(section, spec.name))

    construction = form.construction
    for flag_name, sub_names in CHARGE_GROUPS.items():
        if not getattr(construction, flag_name):
            continue
        for name in sub_names:
            spec = field_for(name)
            payload[spec.key_for(variant)] = _plain_value(spec.kind, getattr(construction, name))

    def put(name: str, value: Any) -> None:
        payload[field_for(name).key_for(variant)] = value

    basics = form.basics
    put("project_type", project_type_to_store(basics.project_type, collapse_villa_apartment=legacy))
    put("community_type", community_type_to_store(basics.community_type))
    put("construction_status", construction_status_to_store(basics.construction_status, keep_legacy=legacy))
    put("launch_date", _date_to_store(basics.launch_date, variant))
    put("possession_date", _date_to_store(basics.possession_date, variant))

    areas = areas_to_store(basics.rera_number, basics, construction)
    put("total_land_area", areas["land"])
    put("open_space", areas["open_space"])
    put("total_buildup_area", areas["buildup"])

    put("power_backup", construction.power_backup)
    put("construction_material", construction_material_to_store(construction.construction_material))
    put("external_amenities", external_amenities_to_store(construction.external_amenities))
    put("amenities", list(construction.amenities))
    put("brochure_link", construction.brochure_link or form.secondary.project_brochure)
    if legacy:
        payload["PriceSheetLink"] = construction.price_sheet_link

    payload["configurations"] = configurations_to_store(form.units.unit_types, variant)

    modes = registration_to_store(form.secondary)
    if legacy:
        payload["Accepted_Modes_of_Lead_Registration"] = modes
    else:
        payload["accepted_modes_of_lead_registration"] = [modes]
    payload.update(pocs_to_store(form.secondary.poc_details, variant))

    logger.debug("serialized %r as %s (%d keys)", basics.project_name, variant, len(payload))
    return payload


def validate_required(model: Union[FormModel, Mapping[str, Any]]) -> Dict[str, str]:
    """Field-keyed errors for the three mandatory fields; empty when valid."""
    form = _as_model(model)
    errors: Dict[str, str] = {}
    for name in REQUIRED_FIELDS:
        spec = field_for(name)
        value = getattr(getattr(form, spec.section), name)
        if not str(value or "").strip():
            errors[spec.path] = _REQUIRED_MESSAGES[name]
    return errors


def prepare_submission(
    model: Union[FormModel, Mapping[str, Any]],
    variant: Optional[VariantLike] = None,
    agent_email: Optional[str] = None,
    *,
    strict: Optional[bool] = None,
) -> SubmissionResult:
    """Validate and serialize a form for submission.

    The payload is always built so callers can save drafts; `ready` tells
    whether it may be submitted.
    """
    settings = get_settings()
    variant = PayloadVariant.coerce(variant or settings.default_payload_variant)
    if strict is None:
        strict = settings.strict_payload_validation

    form = _as_model(model)
    errors = validate_required(form)
    payload = serialize(form, variant)
    legacy = variant == PayloadVariant.LEGACY
    payload["status"] = SUBMITTED
    if agent_email:
        payload["UserEmail" if legacy else "useremail"] = agent_email

    if strict:
        schema_errors = validate_payload(payload, variant)
        if schema_errors:
            logger.warning(
                "payload for %r failed %s schema validation: %s",
                form.basics.project_name,
                variant,
                sorted(schema_errors),
            )
        errors.update(schema_errors)

    if errors:
        logger.debug("submission not ready: %s", sorted(errors))
    return SubmissionResult(variant=variant.value, payload=payload, errors=errors)
