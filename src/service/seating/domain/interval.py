"""
Half-open interval arithmetic on timezone-aware instants.

Every window in the system is `[start, end)`: back-to-back windows
(`10:00-11:00` and `11:00-12:00`) touch but never overlap.
"""

from datetime import datetime
from typing import Optional


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    return a_start < b_end and b_start < a_end


def contains(
    outer_start: datetime, outer_end: datetime, inner_start: datetime, inner_end: datetime
) -> bool:
    return outer_start <= inner_start and inner_end <= outer_end


def clamp(
    start: datetime, end: datetime, lower: datetime, upper: Optional[datetime]
) -> Optional[tuple[datetime, datetime]]:
    """
    Restrict `[start, end)` to `[lower, upper)`; `upper=None` means unbounded.

    Returns:
        The clipped interval, or None when nothing of it is left
    """
    clipped_start = max(start, lower)
    clipped_end = end if upper is None else min(end, upper)
    if clipped_start >= clipped_end:
        return None
    return clipped_start, clipped_end
