"""Ledger input validation and clamping utilities."""
import math
import re
from typing import Dict, Mapping, Optional, Union

from qada.models.ledger import PRAYERS, Prayer, PrayerMap

_NON_DIGITS = re.compile(r"\D")

# Upper bound for a daily pace
MAX_PACE = 1_000_000


class SetupValidationError(Exception):
    """Setup input that cannot produce a ledger."""

    field: Optional[str] = None

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        if field is not None:
            self.field = field


class InvalidDateError(SetupValidationError):
    field = "birth_date"


class NoEligibleDaysError(SetupValidationError):
    field = "start_age"


def clamp_start_age(start_age: Union[int, float, None]) -> int:
    """Truncate toward zero and clamp at 0; missing, inf and NaN count as 0."""
    if start_age is None or not math.isfinite(start_age):
        return 0
    return max(0, math.trunc(start_age))


def clamp_percent(percent: Union[int, float, None]) -> int:
    """Clamp a percentage into 0..100; missing counts as 0."""
    if percent is None:
        return 0
    return int(max(0, min(100, percent)))


def clamp_percent_map(percent_missed: Mapping[Prayer, Union[int, float, None]]) -> PrayerMap:
    return {prayer: clamp_percent(percent_missed.get(prayer)) for prayer in PRAYERS}


def clamp_count(count: int, eligible_days: int) -> int:
    """Clamp a count into 0..eligible_days (0 when there are no eligible days)."""
    if eligible_days <= 0:
        return 0
    return max(0, min(eligible_days, count))


def digits_only(text: Optional[str]) -> str:
    """Strip everything but ASCII digits, the way a number pad input does."""
    if not text:
        return ""
    return _NON_DIGITS.sub("", text)


def parse_digits(text: Optional[str], limit: int) -> Optional[int]:
    """
    Digits of ``text`` as an int capped at ``limit``; None when there are none.

    The cap is applied on the digit string so arbitrarily long input never
    reaches ``int()``.
    """
    digits = digits_only(text)
    if not digits:
        return None
    limit = max(0, limit)
    significant = digits.lstrip("0")
    if len(significant) > len(str(limit)):
        return limit
    return min(int(significant or "0"), limit)


def parse_pace_value(value: Union[int, str, None]) -> int:
    """Blank -> 0, non-digits stripped, clamped into 0..MAX_PACE."""
    if value is None:
        return 0
    if isinstance(value, int):
        return max(0, min(MAX_PACE, value))
    parsed = parse_digits(str(value), MAX_PACE)
    return parsed if parsed is not None else 0


def sanitize_pace(pace: Mapping[Prayer, Union[int, str, None]]) -> PrayerMap:
    return {prayer: parse_pace_value(pace.get(prayer)) for prayer in PRAYERS}


PACE_PRESETS: Dict[str, PrayerMap] = {
    "one_each": {prayer: 1 for prayer in PRAYERS},
    "zero_all": {prayer: 0 for prayer in PRAYERS},
}
