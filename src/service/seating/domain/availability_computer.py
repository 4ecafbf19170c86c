from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from src.service.seating.domain.entity.seat_entity import EntryStatus, Seat, SeatEntry
from src.service.seating.domain.enum.availability_status import AvailabilityStatus
from src.service.seating.domain.interval import clamp, overlaps
from src.service.seating.domain.value_object.availability import (
    BreakWindow,
    FreeSlot,
    SeatAvailability,
)


class AvailabilityComputer:
    """
    Free/occupied view of one seat over a query window.

    Only `active` entries that have not ended yet block time. Gaps shorter than
    `min_slot_minutes` are not offered. Break windows are reported separately,
    each with the part of it nobody has claimed yet.
    """

    def __init__(self, *, min_slot_minutes: int = 30) -> None:
        self.min_slot = timedelta(minutes=min_slot_minutes)

    def free_slots(
        self,
        entries: Iterable[SeatEntry],
        *,
        query_start: Optional[datetime],
        query_end: Optional[datetime],
        now: datetime,
    ) -> List[FreeSlot]:
        window_start = max(query_start, now) if query_start else now
        if query_end is not None and window_start >= query_end:
            return []

        active = sorted(
            (e for e in entries if e.status == EntryStatus.ACTIVE and e.end > now),
            key=lambda e: e.start,
        )
        if not active:
            return [FreeSlot(start=window_start, end=query_end)]

        slots: List[FreeSlot] = []
        cursor = window_start
        for entry in active:
            if query_end is not None and entry.start >= query_end:
                break
            if cursor < entry.start:
                self._emit(slots, cursor, entry.start)
            cursor = max(cursor, entry.end)

        if query_end is None:
            slots.append(FreeSlot(start=cursor, end=None))
        elif cursor < query_end:
            self._emit(slots, cursor, query_end)
        return slots

    def compute(
        self,
        seat: Seat,
        *,
        query_start: Optional[datetime],
        query_end: Optional[datetime],
        now: datetime,
    ) -> SeatAvailability:
        window_start = max(query_start, now) if query_start else now
        slots = self.free_slots(
            seat.entries, query_start=query_start, query_end=query_end, now=now
        )
        return SeatAvailability(
            seat_id=seat.id,
            status=self._status(slots, window_start=window_start, window_end=query_end),
            window_start=window_start,
            window_end=query_end,
            free_slots=slots,
            break_windows=self._break_windows(
                seat, window_start=window_start, window_end=query_end, now=now
            ),
        )

    def _emit(self, slots: List[FreeSlot], start: datetime, end: datetime) -> None:
        if end - start >= self.min_slot:
            slots.append(FreeSlot(start=start, end=end))

    @staticmethod
    def _status(
        slots: List[FreeSlot], *, window_start: datetime, window_end: Optional[datetime]
    ) -> AvailabilityStatus:
        if not slots:
            return AvailabilityStatus.BOOKED
        if len(slots) == 1 and slots[0].start == window_start and slots[0].end == window_end:
            return AvailabilityStatus.AVAILABLE
        return AvailabilityStatus.LIMITED

    def _break_windows(
        self,
        seat: Seat,
        *,
        window_start: datetime,
        window_end: Optional[datetime],
        now: datetime,
    ) -> List[BreakWindow]:
        windows: List[BreakWindow] = []
        for brk in seat.break_entries():
            if brk.end <= now:
                continue
            visible = clamp(brk.start, brk.end, window_start, window_end)
            if visible is None:
                continue

            # The holder's own active entry does not block the window it donated
            others = [
                e
                for e in seat.active_entries()
                if e.booking_id != brk.booking_id and overlaps(e.start, e.end, *visible)
            ]
            open_slots = self.free_slots(
                others, query_start=visible[0], query_end=visible[1], now=now
            )
            windows.append(
                BreakWindow(
                    booking_id=brk.booking_id,
                    start=brk.start,
                    end=brk.end,
                    free_slots=[
                        s for s in open_slots if s.end is None or s.end - s.start >= self.min_slot
                    ],
                )
            )
        return windows
