"""Area and date conversions shared by both mapping directions.

All functions are pure and never raise: bad input yields 0 for areas and an
empty (or unchanged) string for dates.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Optional

from dateutil import parser as date_parser

from .normalize import to_float

logger = logging.getLogger("pob.units")

SQMT_PER_ACRE = 4046.86
SQFT_PER_SQMT = 10.7639

RTM = "RTM"

_DDMMYYYY_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_ISO_PREFIX_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")
_LEGACY_DMY_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})$")

# Parts missing from a free-form date ("2026", "March 2026") come from here.
_PARTIAL_DATE_DEFAULT = datetime(2000, 1, 1)


def _positive(value: Any) -> Optional[float]:
    parsed = to_float(value)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def sqmt_to_acres(value: Any) -> float:
    parsed = _positive(value)
    if parsed is None:
        return 0
    return parsed / SQMT_PER_ACRE


def sqmt_to_sqft(value: Any) -> float:
    parsed = _positive(value)
    if parsed is None:
        return 0
    return parsed * SQFT_PER_SQMT


def acres_to_sqmt(value: Any) -> float:
    parsed = _positive(value)
    if parsed is None:
        return 0
    return parsed * SQMT_PER_ACRE


def sqft_to_sqmt(value: Any) -> float:
    parsed = _positive(value)
    if parsed is None:
        return 0
    return parsed / SQFT_PER_SQMT


def is_rtm(value: Any) -> bool:
    return isinstance(value, str) and value.strip().upper() == RTM


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def ddmmyyyy_to_iso(value: Any) -> str:
    """Strict DD/MM/YYYY -> YYYY-MM-DD. Two-digit years are rejected."""
    if not isinstance(value, str) or not value.strip():
        return ""
    text = value.strip()
    if is_rtm(text):
        return RTM
    m = _DDMMYYYY_RE.match(text)
    if not m:
        return ""
    parsed = _safe_date(int(m.group(3)), int(m.group(2)), int(m.group(1)))
    if parsed is None:
        return ""
    return parsed.isoformat()


def iso_to_ddmmyyyy(value: Any) -> Any:
    """Strict YYYY-MM-DD -> DD/MM/YYYY; anything else is returned unchanged."""
    if not isinstance(value, str) or not value.strip():
        return value
    text = value.strip()
    if is_rtm(text):
        return RTM
    m = _ISO_RE.match(text)
    if not m:
        return value
    parsed = _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    if parsed is None:
        return value
    return parsed.strftime("%d/%m/%Y")


def parse_legacy_date(value: Any) -> str:
    """Lenient parser for dates found in old records; returns ISO or "".

    Unlike `ddmmyyyy_to_iso`, accepts `d/m/yy` (expanded as 20yy), dashes as
    separators, timestamps and free-form dates.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        return ""
    text = value.strip()

    m = _LEGACY_DMY_RE.match(text)
    if m:
        day, month, year = m.groups()
        if len(year) == 2:
            year = "20" + year
        if len(year) != 4:
            return ""
        parsed = _safe_date(int(year), int(month), int(day))
        return parsed.isoformat() if parsed else ""

    m = _ISO_PREFIX_RE.match(text)
    if m:
        return ddmmyyyy_to_iso(iso_to_ddmmyyyy(m.group(1)))

    try:
        parsed = date_parser.parse(text, dayfirst=True, default=_PARTIAL_DATE_DEFAULT)
        return parsed.date().isoformat()
    except (ValueError, OverflowError) as exc:
        logger.debug("unparseable legacy date %r: %s", text, exc)
        return ""


def format_display_date(value: Any) -> str:
    """Render a stored date as the form shows it: DD/MM/YYYY, "RTM" or ""."""
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return iso_to_ddmmyyyy(parse_legacy_date(value))
    if not isinstance(value, str):
        return ""
    text = value.strip()
    if not text:
        return ""
    if is_rtm(text):
        return RTM
    iso = ddmmyyyy_to_iso(text)
    if not iso:
        iso = parse_legacy_date(text)
    if not iso:
        logger.debug("dropping unparseable date %r", text)
        return ""
    return iso_to_ddmmyyyy(iso)


def parse_display_date(value: Any) -> Optional[date]:
    """Parse a form date (DD/MM/YYYY, or ISO as a fallback) into a `date`."""
    if not isinstance(value, str) or not value.strip() or is_rtm(value):
        return None
    iso = ddmmyyyy_to_iso(value)
    if not iso:
        iso = parse_legacy_date(value)
    if not iso:
        return None
    return date.fromisoformat(iso)
