from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from .enums import ConstructionStatus
from .settings import get_settings
from .units import is_rtm, parse_display_date

logger = logging.getLogger("pob.status")


def derive_construction_status(possession_date: Any, *, today: Optional[date] = None) -> Optional[str]:
    """Seed the construction status from a possession date.

    Rules:
    - "RTM" means ready to move.
    - Past dates and dates within one average month are RTM.
    - Dates within six average months are "About to RTM".
    - Anything later is "Under Construction".
    - Missing or unparseable dates return None; the caller keeps its value.
    """

    if is_rtm(possession_date):
        return ConstructionStatus.RTM.value

    parsed: Optional[date] = None
    if isinstance(possession_date, datetime):
        parsed = possession_date.date()
    elif isinstance(possession_date, date):
        parsed = possession_date
    elif isinstance(possession_date, str):
        parsed = parse_display_date(possession_date)
    if parsed is None:
        if possession_date:
            logger.debug("cannot derive status from %r", possession_date)
        return None

    if today is None:
        today = date.today()

    settings = get_settings()
    days = (parsed - today).days
    if days <= settings.rtm_window_days:
        return ConstructionStatus.RTM.value
    if days <= settings.about_to_rtm_window_days:
        return ConstructionStatus.ABOUT_TO_RTM.value
    return ConstructionStatus.UNDER_CONSTRUCTION.value
