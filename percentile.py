# percentile.py
"""
Percentile estimate for a JEE Main score.

The sitting is first mapped to a comparable sitting of the reference year, then
the score is linearly interpolated over that sitting's marks -> percentile
table. Scores outside the table are clamped and flagged rather than
extrapolated. Pure function of the reference data; no I/O.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from normalize import normalize_test_identifier, round_half_up
from percentile_data import MAP_2026_TO_2025, PERCENTILE_TABLE_2025
from schemas.analysis import PercentileResult

_MONTHS = ["", "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_shift_key(exam_date: str, shift: str) -> str:
    """("2026-01-28", "Shift 1") -> "2026-01-28_S1"."""
    code = "S1" if shift == "Shift 1" else "S2"
    return f"{exam_date}_{code}"


def format_shift_key_for_display(shift_key: str) -> str:
    """"2025-01-28_S1" -> "28 Jan 2025 Shift 1"."""
    date_part, _, code = shift_key.partition("_")
    year, month, day = date_part.split("-")
    shift_name = "Shift 1" if code == "S1" else "Shift 2"
    return f"{int(day)} {_MONTHS[int(month)]} {year} {shift_name}"


def get_mapped_shift(
    exam_date: str, shift: str, shift_map: Mapping[str, str] = MAP_2026_TO_2025
) -> Optional[str]:
    ident = normalize_test_identifier(exam_date, shift)
    if not ident.valid:
        return None
    return shift_map.get(format_shift_key(ident.exam_date, ident.shift))


def _result(mapped: str, percentile: float, display: str, **flags) -> PercentileResult:
    return PercentileResult(
        percentile=percentile,
        display_value=display,
        mapped_2025_shift=mapped,
        mapped_2025_shift_display=format_shift_key_for_display(mapped),
        **flags,
    )


def estimate_percentile(
    marks: float,
    exam_date: str,
    shift: str,
    shift_map: Mapping[str, str] = MAP_2026_TO_2025,
    tables: Mapping[str, List[Dict[str, float]]] = PERCENTILE_TABLE_2025,
) -> PercentileResult:
    mapped = get_mapped_shift(exam_date, shift, shift_map)
    if not mapped:
        return PercentileResult(percentile=None, display_value="N/A")

    table = tables.get(mapped) or []
    if not table:
        return PercentileResult(
            percentile=None,
            display_value="N/A",
            mapped_2025_shift=mapped,
            mapped_2025_shift_display=format_shift_key_for_display(mapped),
        )

    points = sorted(table, key=lambda pt: pt["marks"])
    lowest, highest = points[0], points[-1]

    if marks < lowest["marks"]:
        return _result(mapped, lowest["p"], f"< {lowest['p']}", is_below=True)
    if marks > highest["marks"]:
        return _result(mapped, highest["p"], f"> {highest['p']}", is_above=True)

    for p1, p2 in zip(points, points[1:]):
        if p1["marks"] <= marks <= p2["marks"]:
            span = p2["marks"] - p1["marks"]
            ratio = (marks - p1["marks"]) / span if span else 0.0
            value = round_half_up(p1["p"] + ratio * (p2["p"] - p1["p"]))
            return _result(mapped, value, f"{value:.2f}")

    # single-point table and the score sits exactly on it
    return _result(mapped, highest["p"], f"{highest['p']:.2f}")
