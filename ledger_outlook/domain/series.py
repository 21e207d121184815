"""Chart-series post-processing shared by the payoff projector and the cash-flow forecaster"""

import math
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, TypeVar

from ledger_outlook.domain.models import PayoffScheduleItem

T = TypeVar("T")

MAX_CHART_POINTS = 60


def bucket_by_month(items: Sequence[PayoffScheduleItem]) -> List[PayoffScheduleItem]:
    """
    Collapse schedule items sharing a month label into one bucket.

    Principal and interest are summed; balance, cumulative totals and date come
    from the latest item. A bucket counts as historical only when every item in
    it is historical. Bucket order follows first appearance.
    """
    buckets: Dict[str, PayoffScheduleItem] = {}

    for item in items:
        existing = buckets.get(item.label)
        if existing is None:
            buckets[item.label] = replace(item)
            continue

        buckets[item.label] = replace(
            item,
            principal_paid=round(existing.principal_paid + item.principal_paid, 2),
            interest_paid=round(existing.interest_paid + item.interest_paid, 2),
            is_projected=existing.is_projected or item.is_projected,
        )

    return list(buckets.values())


def downsample_series(points: Sequence[T], max_points: int = MAX_CHART_POINTS) -> List[T]:
    """
    Keep every ceil(n / max_points)-th point, always retaining the final one.

    Output length is at most max_points + 1.
    """
    if len(points) <= max_points:
        return list(points)

    step = math.ceil(len(points) / max_points)
    sampled = list(points[::step])
    if sampled[-1] is not points[-1]:
        sampled.append(points[-1])
    return sampled


def stitch_display_series(points: Sequence[T]) -> List[T]:
    """
    Split balances into contiguous historical and projected display series.

    Historical points get historical_balance, projected points get
    projected_balance, and the last historical point before the first projected
    one gets both so the two lines meet.
    """
    stitched = []
    for i, point in enumerate(points):
        if point.is_projected:
            stitched.append(replace(point, historical_balance=None, projected_balance=point.balance))
            continue

        next_is_projected = i + 1 < len(points) and points[i + 1].is_projected
        stitched.append(
            replace(
                point,
                historical_balance=point.balance,
                projected_balance=point.balance if next_is_projected else None,
            )
        )
    return stitched


def projection_start_label(points: Sequence[T]) -> Optional[str]:
    """Label of the first projected point, or None when nothing is projected"""
    for point in points:
        if point.is_projected:
            return point.label
    return None
