"""
Pace projection.

Given a daily make-up pace per prayer, work out how long each prayer
takes to reach zero, the overall horizon and the finish date. A prayer
with something remaining and no pace blocks the whole projection.
"""

from datetime import date
from enum import Enum
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel

from qada.core.calc import ceil_div
from qada.core.dates import add_days, diff_days, start_of_today
from qada.models.ledger import PRAYERS, Prayer


class PaceStatus(str, Enum):
    ON_TRACK = "on_track"
    UNREACHABLE = "unreachable"   # some prayer has remaining > 0 and pace 0
    COMPLETE = "complete"         # nothing remaining anywhere


class PaceProjection(BaseModel):
    status: PaceStatus
    days_for: Dict[Prayer, Optional[int]]   # None = blocked
    blocked: List[Prayer] = []
    days_needed: int = 0
    limiting_prayer: Optional[Prayer] = None
    finish_date: Optional[date] = None
    total_remaining: int = 0
    message: str = ""


class GoalPace(BaseModel):
    goal_date: date
    days_until_goal: int
    required: Dict[Prayer, int]


def project_pace(
    remaining: Mapping[Prayer, int],
    pace: Mapping[Prayer, int],
    today: Optional[date] = None,
) -> PaceProjection:
    days_for: Dict[Prayer, Optional[int]] = {}
    blocked: List[Prayer] = []

    for prayer in PRAYERS:
        left = remaining.get(prayer, 0)
        per_day = pace.get(prayer, 0)
        if left <= 0:
            days_for[prayer] = 0
        elif per_day <= 0:
            days_for[prayer] = None
            blocked.append(prayer)
        else:
            days_for[prayer] = ceil_div(left, per_day)

    total_remaining = sum(max(0, remaining.get(p, 0)) for p in PRAYERS)

    if blocked:
        return PaceProjection(
            status=PaceStatus.UNREACHABLE,
            days_for=days_for,
            blocked=blocked,
            total_remaining=total_remaining,
            message="Some prayers have remaining counts with a pace of 0/day. "
                    "Increase the pace to calculate a finish estimate.",
        )

    # Strict comparison keeps the first prayer in canonical order on ties
    days_needed = 0
    limiting: Optional[Prayer] = None
    for prayer in PRAYERS:
        if days_for[prayer] > days_needed:
            days_needed = days_for[prayer]
            limiting = prayer

    if days_needed == 0:
        return PaceProjection(
            status=PaceStatus.COMPLETE,
            days_for=days_for,
            total_remaining=total_remaining,
            message="All make-up prayers are complete.",
        )

    finish = add_days(today or start_of_today(), days_needed)
    return PaceProjection(
        status=PaceStatus.ON_TRACK,
        days_for=days_for,
        days_needed=days_needed,
        limiting_prayer=limiting,
        finish_date=finish,
        total_remaining=total_remaining,
    )


def required_pace(
    remaining: Mapping[Prayer, int],
    goal_date: date,
    today: Optional[date] = None,
) -> Optional[GoalPace]:
    """Daily pace per prayer needed to reach zero by ``goal_date``; None if the goal is not in the future."""
    days = diff_days(goal_date, today or start_of_today())
    if days <= 0:
        return None
    required = {p: ceil_div(max(0, remaining.get(p, 0)), days) for p in PRAYERS}
    return GoalPace(goal_date=goal_date, days_until_goal=days, required=required)
