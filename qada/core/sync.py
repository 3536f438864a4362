"""
Percent <-> count conversion for setup.

During setup a user may type either a percentage or an absolute count
for each prayer. Whichever field was edited last is authoritative: it is
clamped, and the other field is recomputed from the clamped value so the
two always agree. Live conversion rounds half up to the nearest whole
number; committing totals uses ceiling instead (see ``compute_totals``).
"""

from typing import Literal, Optional

from pydantic import BaseModel

from qada.utils.ledger_validation import clamp_count, clamp_percent, digits_only, parse_digits


def round_half_up(numerator: int, denominator: int) -> int:
    """round(numerator / denominator) with .5 going up, for non-negative ints."""
    return (2 * numerator + denominator) // (2 * denominator)


def percent_to_count(percent: int, eligible_days: int) -> int:
    percent = clamp_percent(percent)
    if eligible_days <= 0:
        return 0
    count = round_half_up(eligible_days * percent, 100)
    return clamp_count(count, eligible_days)


def count_to_percent(count: int, eligible_days: int) -> int:
    count = clamp_count(count, eligible_days)
    if eligible_days <= 0:
        return 0
    return clamp_percent(round_half_up(count * 100, eligible_days))


class PercentCountPair(BaseModel):
    """The two setup fields for one prayer. None means unset (rendered blank)."""

    percent: Optional[int] = None
    count: Optional[int] = None
    source: Optional[Literal["percent", "count"]] = None

    @property
    def effective_percent(self) -> int:
        """Contribution to totals: unset counts as 0."""
        return self.percent if self.percent is not None else 0

    def edit_percent(self, text: Optional[str], eligible_days: int) -> "PercentCountPair":
        digits = digits_only(text)
        if not digits:
            return PercentCountPair()
        percent = clamp_percent(parse_digits(digits, 100))
        return PercentCountPair(
            percent=percent,
            count=percent_to_count(percent, eligible_days),
            source="percent",
        )

    def edit_count(self, text: Optional[str], eligible_days: int) -> "PercentCountPair":
        digits = digits_only(text)
        if not digits:
            return PercentCountPair()
        count = clamp_count(parse_digits(digits, eligible_days), eligible_days)
        return PercentCountPair(
            percent=count_to_percent(count, eligible_days),
            count=count,
            source="count",
        )

    def refresh(self, eligible_days: int) -> "PercentCountPair":
        """Recompute after eligible days changed, keeping the last-edited field."""
        if self.source == "count" and self.count is not None:
            return self.edit_count(str(self.count), eligible_days)
        if self.percent is not None:
            return self.edit_percent(str(self.percent), eligible_days)
        return PercentCountPair()
