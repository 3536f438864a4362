from datetime import date
from typing import Dict, List, Mapping, Optional

from qada.core.dates import add_years, diff_days, parse_calendar_date, start_of_today
from qada.models.ledger import MILESTONES, PRAYERS, Prayer, PrayerMap, QadaLedger
from qada.utils.ledger_validation import clamp_percent


def ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def compute_eligible_days(birth_date: str, start_age: int, today: Optional[date] = None) -> int:
    """
    Days since the obligation started (birth date + start age years).

    Returns 0 for an unparseable birth date or a start date in the future.
    """
    birth = parse_calendar_date(birth_date)
    if birth is None:
        return 0

    try:
        start = add_years(birth, start_age)
    except OverflowError:
        return 0

    days = diff_days(today or start_of_today(), start)
    return max(0, days)


def compute_totals(eligible_days: int, percent_missed: Mapping[Prayer, int]) -> PrayerMap:
    """
    Debt per prayer: ceil(eligible_days * percent / 100).

    Ceiling so a stated percentage is never under-counted.
    """
    totals: PrayerMap = {}
    for prayer in PRAYERS:
        percent = clamp_percent(percent_missed.get(prayer))
        totals[prayer] = ceil_div(eligible_days * percent, 100)
    return totals


def remaining_share(totals: Mapping[Prayer, int], remaining: Mapping[Prayer, int]) -> float:
    """Overall remaining as a percentage of overall totals (0 when nothing was owed)."""
    owed = sum(totals.get(p, 0) for p in PRAYERS)
    if owed <= 0:
        return 0.0
    left = sum(remaining.get(p, 0) for p in PRAYERS)
    return left * 100.0 / owed


def reached_milestones(totals: Mapping[Prayer, int], remaining: Mapping[Prayer, int]) -> List[str]:
    """Milestones (75/50/25/0 % remaining) the current counts are at or below."""
    share = remaining_share(totals, remaining)
    return [m for m in MILESTONES if share <= int(m)]


def summarize_progress(ledger: QadaLedger) -> Dict:
    prayers = [
        {
            "prayer": prayer,
            "remaining": ledger.remaining[prayer],
            "total": ledger.totals[prayer],
            "percent_missed": ledger.percent_missed[prayer],
        }
        for prayer in PRAYERS
    ]
    return {
        "eligible_days": ledger.eligible_days,
        "total_remaining": ledger.total_remaining(),
        "total_owed": ledger.total_owed(),
        "percent_remaining": round(remaining_share(ledger.totals, ledger.remaining), 2),
        "updated_at": ledger.updated_at,
        "prayers": prayers,
    }
