"""Read-only helpers for the shareable property comparison page.

These work on raw stored records, not on the form model, and treat
placeholder strings such as "---" or "n/a" as missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .configurations import parse_configurations
from .normalize import to_float
from .resolver import is_valid_display_value

NOT_AVAILABLE = "N/A"

CRORE = 10_000_000
LAKH = 100_000


def display_value(record: Optional[Mapping[str, Any]], *keys: str) -> str:
    if not record:
        return NOT_AVAILABLE
    for key in keys:
        value = record.get(key)
        if is_valid_display_value(value):
            return str(value)
    return NOT_AVAILABLE


def format_price(value: Any) -> str:
    """Indian price notation: crores, lakhs, else grouped digits."""
    if not is_valid_display_value(value) or value == NOT_AVAILABLE:
        return NOT_AVAILABLE
    num = to_float(value)
    if num is None:
        return str(value)
    if num >= CRORE:
        return f"{num / CRORE:.2f} Cr"
    if num >= LAKH:
        return f"{num / LAKH:.2f} Lac"
    if num.is_integer():
        return f"{int(num):,}"
    return f"{num:,.3f}".rstrip("0").rstrip(".")


def configurations_summary(record: Optional[Mapping[str, Any]]) -> str:
    if not record:
        return NOT_AVAILABLE
    raw = record.get("configurations")
    if isinstance(raw, (list, str)):
        rows = parse_configurations(raw)
        types = [str(row.get("type")) for row in rows if row.get("type")]
        if types:
            return ", ".join(types)
    return display_value(record, "config")


@dataclass(frozen=True)
class Metric:
    label: str
    keys: Tuple[str, ...]
    formatter: Optional[Callable[[Any], str]] = None

    def render(self, record: Mapping[str, Any]) -> str:
        value = display_value(record, *self.keys)
        if self.formatter is not None and value != NOT_AVAILABLE:
            return self.formatter(value)
        return value


COMPARISON_METRICS: Tuple[Metric, ...] = (
    Metric("Price Range", ("price_range", "priceRange"), format_price),
    Metric("Price/Sq Ft", ("price_per_sft", "Price_per_sft")),
    Metric("Size Range", ("size_range", "sizeRange", "sqfeet")),
    Metric("GRID Score", ("grid_score", "GRID_Score")),
    Metric("Location", ("areaname", "city", "projectlocation")),
    Metric("Possession", ("possession_date", "possessionDate", "Possession_Date")),
    Metric("Status", ("construction_status", "Construction_Status")),
    Metric("Towers", ("number_of_towers", "Number_of_Towers")),
    Metric("Total Units", ("total_units", "total_number_of_units", "Total_Number_of_Units")),
    Metric("Available", ("available_units",)),
)


def build_comparison(
    records: Sequence[Mapping[str, Any]],
    metrics: Sequence[Metric] = COMPARISON_METRICS,
) -> Dict[str, Any]:
    """Header cards plus one row per metric, one cell per record."""
    headers: List[Dict[str, str]] = []
    for record in records:
        headers.append(
            {
                "name": display_value(record, "projectname", "projectName", "ProjectName"),
                "builder": display_value(record, "buildername", "builderName", "BuilderName"),
                "rera_number": display_value(record, "rera_number", "RERA_Number"),
                "configurations": configurations_summary(record),
            }
        )
    rows = [
        {"label": metric.label, "values": [metric.render(record) for record in records]}
        for metric in metrics
    ]
    return {"properties": headers, "rows": rows}
