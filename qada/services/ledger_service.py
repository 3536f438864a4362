import logging
from datetime import date, datetime, timezone
from typing import Mapping, Optional, Union

from qada.core.calc import compute_eligible_days, compute_totals, reached_milestones
from qada.core.config import settings
from qada.core.dates import format_calendar_date, parse_calendar_date
from qada.models.ledger import Prayer, QadaLedger
from qada.utils.ledger_validation import (
    InvalidDateError,
    NoEligibleDaysError,
    clamp_percent_map,
    clamp_start_age,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _merge_milestones(ledger: QadaLedger) -> dict:
    seen = dict(ledger.milestones_seen)
    for milestone in reached_milestones(ledger.totals, ledger.remaining):
        seen[milestone] = True
    return seen


class LedgerService:
    @staticmethod
    def create_initial_ledger(
        birth_date: str,
        start_age: Union[int, float],
        percent_missed: Mapping[Prayer, Union[int, float, None]],
        now: Optional[datetime] = None,
        today: Optional[date] = None,
    ) -> QadaLedger:
        """
        Build a new ledger from setup input.

        Raises InvalidDateError for an unparseable birth date and
        NoEligibleDaysError when the obligation has not started yet.
        """
        birth = parse_calendar_date(birth_date)
        if birth is None:
            raise InvalidDateError("Invalid birth date")

        age = clamp_start_age(start_age)
        percents = clamp_percent_map(percent_missed)

        eligible_days = compute_eligible_days(format_calendar_date(birth), age, today)
        if eligible_days == 0:
            raise NoEligibleDaysError("No eligible days (start date is in the future)")

        totals = compute_totals(eligible_days, percents)
        stamp = now or _utcnow()

        ledger = QadaLedger(
            version=settings.LEDGER_VERSION,
            birth_date=format_calendar_date(birth),
            start_age=age,
            percent_missed=percents,
            eligible_days=eligible_days,
            totals=totals,
            remaining=dict(totals),
            created_at=stamp,
            updated_at=stamp,
        )
        ledger.milestones_seen = _merge_milestones(ledger)

        logger.info("Created ledger: %d eligible days, %d owed", eligible_days, ledger.total_owed())
        return ledger

    @staticmethod
    def apply_delta(
        ledger: QadaLedger,
        prayer: Prayer,
        delta: int,
        now: Optional[datetime] = None,
    ) -> QadaLedger:
        """
        Add ``delta`` to one prayer's remaining count, clamped at 0.

        No upper clamp: prayers missed after setup may push remaining
        above the original total.
        """
        remaining = dict(ledger.remaining)
        remaining[prayer] = max(0, remaining[prayer] + delta)

        updated = ledger.model_copy(update={
            "remaining": remaining,
            "updated_at": max(now or _utcnow(), ledger.updated_at),
        })
        updated.milestones_seen = _merge_milestones(updated)
        return updated

    @staticmethod
    def set_goal_date(
        ledger: QadaLedger,
        goal_date: Optional[str],
        now: Optional[datetime] = None,
    ) -> QadaLedger:
        """Set or clear (None/blank) the target finish date."""
        value = None
        if goal_date:
            parsed = parse_calendar_date(goal_date)
            if parsed is None:
                raise InvalidDateError("Invalid goal date", field="goal_date")
            value = format_calendar_date(parsed)

        return ledger.model_copy(update={
            "goal_date": value,
            "updated_at": max(now or _utcnow(), ledger.updated_at),
        })
