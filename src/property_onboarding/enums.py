from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, Iterable, List

logger = logging.getLogger("pob.enums")


class ProjectType(StrEnum):
    APARTMENT = "Apartment"
    VILLA = "Villa"
    VILLA_APARTMENT = "Villa Apartment"


class CommunityType(StrEnum):
    """Form vocabulary; the stores spell these out as "... Community"."""

    GATED = "Gated"
    SEMI_GATED = "Semi-Gated"
    STANDALONE = "Standalone"


class ConstructionStatus(StrEnum):
    UNDER_CONSTRUCTION = "Under Construction"
    ABOUT_TO_RTM = "About to RTM"
    RTM = "RTM"


class ConstructionMaterial(StrEnum):
    RED_BRICKS = "Red Bricks"
    CEMENT_BRICKS = "Cement Bricks"
    CONCRETE = "Concrete"


class PowerBackup(StrEnum):
    FULL = "Full"
    PARTIAL = "Partial"
    NONE = "None"


class CPStatus(StrEnum):
    ACCEPTING = "Accepting"
    ONBOARDED = "On-boarded"
    NOT_ACCEPTED = "Not-accepted"


class LandUnitSystem(StrEnum):
    ACRES = "acres"
    SQMT = "sqmt"


class SoldOutStatus(StrEnum):
    ACTIVE = "active"
    SOLD_OUT = "soldout"


class PayloadVariant(StrEnum):
    LEGACY = "legacy"
    CURRENT = "current"

    @classmethod
    def coerce(cls, value: Any) -> "PayloadVariant":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown payload variant: {value!r}") from None


AMENITIES = (
    "Swimming Pool",
    "Gymnasium",
    "Clubhouse",
    "Children's Play Area",
    "Landscaped Gardens",
    "Jogging Track",
    "Tennis Court",
    "Basketball Court",
    "Security System",
    "Power Backup",
    "Rainwater Harvesting",
)

# Stored community labels.
COMMUNITY_TYPE_TO_STORE = {
    CommunityType.GATED: "Gated Community",
    CommunityType.SEMI_GATED: "Semi-Gated Community",
    CommunityType.STANDALONE: "Standalone",
}

_COMMUNITY_ALIASES_OUT = {
    "gated": CommunityType.GATED,
    "gated community": CommunityType.GATED,
    "semi_gated": CommunityType.SEMI_GATED,
    "semi-gated": CommunityType.SEMI_GATED,
    "semi-gated community": CommunityType.SEMI_GATED,
    "standalone": CommunityType.STANDALONE,
    "stand-alone": CommunityType.STANDALONE,
    "open community": CommunityType.STANDALONE,
    "luxury community": CommunityType.STANDALONE,
    "affordable community": CommunityType.STANDALONE,
}

_STATUS_ALIASES = {
    "rtm": ConstructionStatus.RTM,
    "ready to move in": ConstructionStatus.RTM,
    "ready to move": ConstructionStatus.RTM,
    "ready": ConstructionStatus.RTM,
    "completed": ConstructionStatus.RTM,
    "about to rtm": ConstructionStatus.ABOUT_TO_RTM,
    "under construction": ConstructionStatus.UNDER_CONSTRUCTION,
    "ongoing": ConstructionStatus.UNDER_CONSTRUCTION,
    "on-going": ConstructionStatus.UNDER_CONSTRUCTION,
    "not started": ConstructionStatus.UNDER_CONSTRUCTION,
    "planning": ConstructionStatus.UNDER_CONSTRUCTION,
    "planning phase": ConstructionStatus.UNDER_CONSTRUCTION,
}

# Legacy statuses that the document store still accepts verbatim.
_STATUS_KEPT_ON_SAVE = {
    "not started": "Not Started",
    "planning": "Not Started",
    "planning phase": "Not Started",
}

_MATERIAL_ALIASES = {
    "red bricks": ConstructionMaterial.RED_BRICKS,
    "red brick": ConstructionMaterial.RED_BRICKS,
    "brick": ConstructionMaterial.RED_BRICKS,
    "bricks": ConstructionMaterial.RED_BRICKS,
    "cement bricks": ConstructionMaterial.CEMENT_BRICKS,
    "cement brick": ConstructionMaterial.CEMENT_BRICKS,
    "cement": ConstructionMaterial.CEMENT_BRICKS,
    "concrete": ConstructionMaterial.CONCRETE,
    "rcc": ConstructionMaterial.CONCRETE,
}

_EXTERNAL_AMENITY_ALIASES = {
    "clubhouse": "Clubhouse",
    "swimming pool": "Swimming Pool",
    "pool": "Swimming Pool",
    "gym": "Gym",
    "fitness center": "Gym",
    "kids play area": "Kids Play Area",
    "playground": "Kids Play Area",
    "play area": "Kids Play Area",
    "banquet hall": "Banquet Hall",
    "banquet": "Banquet Hall",
    "guest rooms": "Guest Rooms",
    "guest room": "Guest Rooms",
    "co working space": "Co working Space",
    "coworking": "Co working Space",
    "co-working": "Co working Space",
    "jogging track": "Jogging Track",
    "jogging": "Jogging Track",
    "sports facilities": "Sports Facilities",
    "sports": "Sports Facilities",
}

_AMENITY_LOOKUP = {a.casefold(): a for a in AMENITIES}

_CP_TRUE = {"true", "yes", "1"}
_CP_FALSE = {"false", "no", "0", ""}


def _key(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split()).casefold()


def project_type_from_store(value: Any) -> str:
    key = _key(value)
    if not key:
        return ""
    for member in ProjectType:
        if key == member.value.casefold():
            return member.value
    logger.debug("unknown project type %r, using %s", value, ProjectType.APARTMENT)
    return ProjectType.APARTMENT.value


def project_type_to_store(value: Any, *, collapse_villa_apartment: bool) -> str:
    canonical = project_type_from_store(value)
    if not canonical:
        return ProjectType.APARTMENT.value
    if collapse_villa_apartment and canonical == ProjectType.VILLA_APARTMENT:
        return ProjectType.VILLA.value
    return canonical


def community_type_from_store(value: Any) -> str:
    key = _key(value)
    if not key:
        return ""
    if key in {"gated", "gated community"}:
        return CommunityType.GATED.value
    if "semi" in key:
        return CommunityType.SEMI_GATED.value
    if "stand" in key:
        return CommunityType.STANDALONE.value
    if key in _COMMUNITY_ALIASES_OUT:
        return _COMMUNITY_ALIASES_OUT[key].value
    logger.debug("unknown community type %r, using %s", value, CommunityType.GATED)
    return CommunityType.GATED.value


def community_type_to_store(value: Any) -> str:
    member = _COMMUNITY_ALIASES_OUT.get(_key(value), CommunityType.GATED)
    return COMMUNITY_TYPE_TO_STORE[member]


def construction_status_from_store(value: Any) -> str:
    key = _key(value)
    if not key:
        return ""
    member = _STATUS_ALIASES.get(key)
    if member is None:
        logger.debug(
            "unknown construction status %r, using %s",
            value,
            ConstructionStatus.UNDER_CONSTRUCTION,
        )
        member = ConstructionStatus.UNDER_CONSTRUCTION
    return member.value


def construction_status_to_store(value: Any, *, keep_legacy: bool) -> str:
    key = _key(value)
    if keep_legacy and key in _STATUS_KEPT_ON_SAVE:
        return _STATUS_KEPT_ON_SAVE[key]
    return construction_status_from_store(value) or ConstructionStatus.UNDER_CONSTRUCTION.value


def construction_material_from_store(value: Any) -> str:
    key = _key(value)
    if not key:
        return ""
    member = _MATERIAL_ALIASES.get(key)
    if member is None:
        logger.debug("unknown construction material %r, using Concrete", value)
        member = ConstructionMaterial.CONCRETE
    return member.value


def construction_material_to_store(value: Any) -> str:
    return construction_material_from_store(value) or ConstructionMaterial.CONCRETE.value


def power_backup_from_store(value: Any) -> str:
    key = _key(value)
    if not key:
        return ""
    if "full" in key:
        return PowerBackup.FULL.value
    if "partial" in key:
        return PowerBackup.PARTIAL.value
    if "none" in key:
        return PowerBackup.NONE.value
    return str(value)


def external_amenities_to_store(value: Any) -> str:
    """Map free-text external amenities to the stored vocabulary.

    Items with no mapping are dropped.
    """
    if isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        items = str(value or "").split(",")
    mapped: List[str] = []
    for item in items:
        label = _EXTERNAL_AMENITY_ALIASES.get(_key(item))
        if label is None:
            if _key(item):
                logger.debug("dropping unmapped external amenity %r", item)
            continue
        mapped.append(label)
    return ", ".join(mapped)


def amenities_from_store(values: Iterable[Any]) -> List[str]:
    result: List[str] = []
    for value in values:
        label = _AMENITY_LOOKUP.get(_key(value))
        if label is None:
            logger.debug("dropping unknown amenity %r", value)
            continue
        if label not in result:
            result.append(label)
    return result


def cp_status_from_store(value: Any) -> str:
    """Migrate boolean channel-partner flags to the three-way status."""
    if value is True:
        return CPStatus.ACCEPTING.value
    if value is None or value is False:
        return ""
    text = str(value).strip()
    if text.lower() in _CP_TRUE:
        return CPStatus.ACCEPTING.value
    if text.lower() in _CP_FALSE:
        return ""
    for member in CPStatus:
        if text.casefold() == member.value.casefold():
            return member.value
    logger.debug("unknown CP status %r, clearing", value)
    return ""
