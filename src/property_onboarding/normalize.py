import math
import re
from typing import Any, Optional, Union


_WHITESPACE_RE = re.compile(r"\s+")
_NUMBER_TOKEN_RE = re.compile(r"-?\d+(?:\.\d+)?")
_DIGIT_GROUP_COMMA_RE = re.compile(r"(?<=\d),(?=\d)")
_BHK_RE = re.compile(r"(\d+(?:\.\d+)?)\s*bhk", re.IGNORECASE)
_MISSING_NUMERIC = {"", "---", "n/a"}

Number = Union[int, float]


def format_number(value: float, places: int = 4) -> str:
    """Render a float without trailing zeros, rounded to `places` decimals."""
    if value is None or not math.isfinite(value):
        return ""
    text = f"{round(value, places):.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        text = "0"
    return text


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def clean_number(value: Any) -> str:
    """Reduce free text such as "75%" or "1,200 sqft" to its first numeric token.

    Returns "" when no number is present; the residue is always discarded.
    The token is rendered canonically ("12.50" -> "12.5", "007" -> "7").
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_number(value, 6)
    text = _DIGIT_GROUP_COMMA_RE.sub("", str(value))
    match = _NUMBER_TOKEN_RE.search(text)
    if not match:
        return ""
    return format_number(float(match.group(0)), 6)


def to_number(value: Any) -> Optional[Number]:
    token = clean_number(value)
    if not token:
        return None
    parsed = float(token)
    if parsed.is_integer():
        return int(parsed)
    return parsed


def to_float(value: Any) -> Optional[float]:
    token = clean_number(value)
    if not token:
        return None
    return float(token)


def sanitize_numeric(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    if value is None:
        return default
    if isinstance(value, str) and value.strip().lower() in _MISSING_NUMERIC:
        return default
    parsed = to_float(value)
    return default if parsed is None else parsed


def sanitize_integer(value: Any, default: Optional[int] = 0) -> Optional[int]:
    if value is None:
        return default
    if isinstance(value, str) and value.strip().lower() in _MISSING_NUMERIC:
        return default
    parsed = to_float(value)
    if parsed is None or not math.isfinite(parsed):
        return default
    return int(parsed)


def sanitize_text(value: Any, default: Optional[str] = None) -> Optional[str]:
    if value is None:
        return default
    text = as_text(value)
    if text == "" or text.strip() == "---":
        return default
    return text


def normalize_unit_type(value: Any) -> str:
    """Canonical unit-type label: "2BHK" / "2 bhk" -> "2 BHK"."""
    if value is None:
        return ""
    text = _WHITESPACE_RE.sub(" ", str(value)).strip()
    return _BHK_RE.sub(lambda m: f"{m.group(1)} BHK", text)
