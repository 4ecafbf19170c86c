from datetime import datetime
from typing import List, Optional

import attrs
from uuid_utils import UUID

from src.service.seating.domain.enum.availability_status import AvailabilityStatus


@attrs.define(frozen=True)
class FreeSlot:
    start: datetime
    end: Optional[datetime]  # None: open-ended

    @property
    def duration_minutes(self) -> Optional[int]:
        if self.end is None:
            return None
        return int((self.end - self.start).total_seconds() // 60)


@attrs.define(frozen=True)
class BreakWindow:
    """A holder's break, with the sub-ranges still open to other members"""

    booking_id: UUID
    start: datetime
    end: datetime
    free_slots: List[FreeSlot] = attrs.field(factory=list)


@attrs.define(frozen=True)
class SeatAvailability:
    seat_id: int
    status: AvailabilityStatus
    window_start: datetime
    window_end: Optional[datetime]
    free_slots: List[FreeSlot] = attrs.field(factory=list)
    break_windows: List[BreakWindow] = attrs.field(factory=list)
