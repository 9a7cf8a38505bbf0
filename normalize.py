# normalize.py
"""
Canonical exam-date and shift values.

Every lookup keyed by (exam_date, shift) goes through these helpers so that
"S1", "shift 1" and "Shift 1" all land on the same record.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from dateutil import parser as dtparser
from pydantic import BaseModel

VALID_SHIFTS = ("Shift 1", "Shift 2")

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SHIFT_SHORTHAND_RE = re.compile(r"^(?:s(?:hift)?)?[\s\-_]*([12])$", re.I)


class TestIdentifier(BaseModel):
    __test__ = False  # not a pytest class

    valid: bool
    exam_date: Optional[str] = None
    shift: Optional[str] = None
    error: Optional[str] = None


def normalize_shift(shift: Optional[str]) -> Optional[str]:
    """Return "Shift 1" / "Shift 2", or None when the value is not recognisable."""
    if not shift or not isinstance(shift, str):
        return None

    trimmed = shift.strip()
    for valid in VALID_SHIFTS:
        if trimmed.lower() == valid.lower():
            return valid

    m = _SHIFT_SHORTHAND_RE.match(trimmed)
    if m:
        return f"Shift {m.group(1)}"
    return None


def normalize_exam_date(value: Union[str, date, datetime, None]) -> Optional[str]:
    """Return the date as YYYY-MM-DD, or None if it cannot be parsed."""
    if not value:
        return None

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return None

    trimmed = value.strip()
    if _ISO_DATE_RE.match(trimmed):
        # still reject impossible dates such as 2026-02-30
        try:
            datetime.strptime(trimmed, "%Y-%m-%d")
        except ValueError:
            return None
        return trimmed

    try:
        parsed = dtparser.parse(trimmed)
    except (ValueError, OverflowError):
        return None
    return parsed.date().isoformat()


def normalize_test_identifier(exam_date, shift) -> TestIdentifier:
    normalized_date = normalize_exam_date(exam_date)
    normalized_shift = normalize_shift(shift)

    if not normalized_date:
        return TestIdentifier(
            valid=False,
            error=f'Invalid exam date format: "{exam_date}"',
        )
    if not normalized_shift:
        return TestIdentifier(
            valid=False,
            exam_date=normalized_date,
            error=f'Invalid shift format: "{shift}". Expected "Shift 1" or "Shift 2"',
        )
    return TestIdentifier(valid=True, exam_date=normalized_date, shift=normalized_shift)


def get_test_key(exam_date, shift) -> str:
    ident = normalize_test_identifier(exam_date, shift)
    if not ident.valid:
        return f"invalid:{exam_date}|{shift}"
    return f"{ident.exam_date}|{ident.shift}"


def round_half_up(value: float, places: int = 2) -> float:
    """Round to `places` decimals with exact halves going up (3.125 -> 3.13), not to even."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
