from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


DEFAULT_METRIC_RERA_PREFIX = "PRM/KA/RERA/"

# Average month length used by the possession-date windows.
AVG_MONTH_DAYS = 30.44


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = str(raw).strip().lower()
    if v in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        return float(str(raw).strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return default
    return str(raw).strip()


@dataclass(frozen=True)
class Settings:
    """Central settings registry.

    Env vars are read once and cached; call `reset_settings_cache()` after
    changing them.

    Defaults MUST preserve current behavior.
    """

    metric_rera_prefix: str
    rtm_window_days: float
    about_to_rtm_window_days: float
    strict_payload_validation: bool
    default_payload_variant: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            metric_rera_prefix=_env_str(
                "POB_METRIC_RERA_PREFIX", DEFAULT_METRIC_RERA_PREFIX
            ),
            rtm_window_days=_env_float("POB_RTM_WINDOW_DAYS", AVG_MONTH_DAYS),
            about_to_rtm_window_days=_env_float(
                "POB_ABOUT_TO_RTM_WINDOW_DAYS", 6 * AVG_MONTH_DAYS
            ),
            strict_payload_validation=_env_bool(
                "POB_STRICT_PAYLOAD_VALIDATION", False
            ),
            default_payload_variant=_env_str("POB_DEFAULT_PAYLOAD_VARIANT", "legacy"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def reset_settings_cache() -> None:
    """Test helper to force env re-read."""

    get_settings.cache_clear()
