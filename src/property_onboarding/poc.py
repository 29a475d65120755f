"""Points of contact and accepted lead-registration channels."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from .enums import cp_status_from_store
from .normalize import as_text
from .resolver import FieldResolver

logger = logging.getLogger("pob.poc")

REGISTRATION_CHANNELS = (
    # (form attribute, stored key)
    ("whatsapp_registration", "WhatsApp"),
    ("email_registration", "Email"),
    ("web_form_registration", "Web_Form"),
    ("crm_app_registration", "CRM_App_Access"),
)
DURING_SITE_VISIT_KEY = "During_Site_Visit"

_YES = {"yes", "true", "1", "y"}


def is_yes(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return as_text(value).strip().lower() in _YES


def yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def _maybe_json(value: Any) -> Any:
    if isinstance(value, str) and value.strip()[:1] in ("[", "{"):
        try:
            return json.loads(value)
        except ValueError:
            logger.debug("unparseable JSON value %r", value[:80])
            return None
    return value


def _poc_entry(name: Any, contact: Any, role: Any, cp: Any) -> Dict[str, str]:
    return {
        "name": as_text(name),
        "contact": as_text(contact),
        "role": as_text(role),
        "cp_status": cp_status_from_store(cp),
    }


def pocs_from_record(record: Mapping[str, Any]) -> List[Dict[str, str]]:
    """Rebuild the POC list.

    Sources in order: `pocDetails`, then `person_to_confirm_registration`
    (list or object, with role/CP from the singular fields), then the
    singular `POC_*` fields.
    """
    fields = FieldResolver(record)
    role = fields.get(("POC_Role", "poc_role", "pocRole"))
    cp = fields.get(("POC_CP", "cp", "poc_cp", "pocCP"))

    details = _maybe_json(fields.get(("pocDetails", "poc_details", "POC_Details")))
    if isinstance(details, list) and details:
        entries = []
        for item in details:
            if not isinstance(item, Mapping):
                continue
            item_fields = FieldResolver(item)
            entries.append(
                _poc_entry(
                    item_fields.get(("pocName", "name")),
                    item_fields.get(("pocContact", "contact")),
                    item_fields.get(("pocRole", "role")),
                    item_fields.get(("pocCP", "cpStatus", "cp_status", "cp")),
                )
            )
        if entries:
            return entries

    person = _maybe_json(
        fields.truthy(("Person_to_Confirm_Registration", "person_to_confirm_registration"))
    )
    if isinstance(person, list) and person:
        return [
            _poc_entry(p.get("name"), p.get("contact"), role, cp)
            for p in person
            if isinstance(p, Mapping)
        ]
    if isinstance(person, Mapping) and (person.get("name") or person.get("contact")):
        return [_poc_entry(person.get("name"), person.get("contact"), role, cp)]

    name = fields.get(("POC_Name", "poc_name", "pocName"))
    contact = fields.get(("POC_Contact", "poc_contact", "pocContact"))
    if name or contact or role:
        return [_poc_entry(name, contact, role, cp)]
    return []


def registration_from_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Form values for the accepted-registration-mode channels.

    The stored value is an object (legacy) or a one-element list (current).
    """
    fields = FieldResolver(record)
    modes = _maybe_json(
        fields.get(("Accepted_Modes_of_Lead_Registration", "accepted_modes_of_lead_registration"))
    )
    if isinstance(modes, list):
        modes = modes[0] if modes else None
    if not isinstance(modes, Mapping):
        modes = {}

    result: Dict[str, Any] = {}
    for attr, key in REGISTRATION_CHANNELS:
        channel = modes.get(key)
        if not isinstance(channel, Mapping):
            channel = {"enabled": channel}
        result[attr] = {
            "enabled": is_yes(channel.get("enabled")),
            "details": as_text(channel.get("details")),
        }
    result["during_site_visit_registration"] = is_yes(modes.get(DURING_SITE_VISIT_KEY))
    return result


def registration_to_store(secondary: Any) -> Dict[str, Any]:
    modes: Dict[str, Any] = {}
    for attr, key in REGISTRATION_CHANNELS:
        channel = getattr(secondary, attr)
        modes[key] = {"enabled": yes_no(channel.enabled), "details": channel.details}
    modes[DURING_SITE_VISIT_KEY] = yes_no(secondary.during_site_visit_registration)
    return modes


def pocs_to_store(pocs: List[Any], variant: str) -> Dict[str, Any]:
    """Payload keys for the POC list.

    The current store keeps the full name/contact list but only the first
    POC's role and CP status.
    """
    first: Optional[Any] = pocs[0] if pocs else None
    first_name = first.name if first else ""
    first_contact = first.contact if first else ""
    first_role = first.role if first else ""
    first_cp = first.cp_status if first else ""

    if variant == "current":
        return {
            "person_to_confirm_registration": [
                {"name": p.name, "contact": p.contact} for p in pocs
            ],
            "poc_name": first_name,
            "poc_contact": first_contact,
            "poc_role": first_role,
            "cp": first_cp,
        }
    return {
        "person_to_confirm_registration": {"name": first_name, "contact": first_contact},
        "POC_Name": first_name,
        "POC_Contact": first_contact,
        "POC_Role": first_role,
        "POC_CP": first_cp,
        "pocDetails": [
            {
                "pocName": p.name,
                "pocContact": p.contact,
                "pocRole": p.role,
                "pocCP": p.cp_status,
            }
            for p in pocs
        ],
    }
