from datetime import datetime
from enum import StrEnum
from typing import Iterable, List, Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import ConsistencyError
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.interval import contains, overlaps


class EntryStatus(StrEnum):
    ACTIVE = 'active'
    ON_BREAK = 'on_break'


@attrs.define(frozen=True)
class SeatEntry:
    booking_id: UUID
    user_id: int
    user_name: str
    user_email: str
    start: datetime
    end: datetime
    status: EntryStatus


@attrs.define
class Seat:
    """
    A physical seat and its booking entries.

    Entries are never stored on their own: `project` rebuilds them from the
    seat's live bookings, so the booking records stay the only source of truth.
    A live booking contributes one `active` entry for its whole window and one
    `on_break` entry per break.
    """

    id: int
    location: str
    seat_number: int
    entries: List[SeatEntry] = attrs.field(factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def project(
        cls,
        *,
        id: int,
        location: str,
        seat_number: int,
        bookings: Iterable[Booking],
        created_at: Optional[datetime] = None,
    ) -> 'Seat':
        """
        Raises:
            ConsistencyError: A booking of another seat was handed in, a break
                sticks out of its booking, or two breaks overlap
        """
        entries: List[SeatEntry] = []
        for booking in bookings:
            if not booking.is_live:
                continue
            if booking.seat_id != id:
                raise ConsistencyError(f'Booking {booking.id} does not belong to seat {id}')

            entries.append(_entry(booking, booking.start, booking.end, EntryStatus.ACTIVE))
            for brk in booking.breaks:
                if not contains(booking.start, booking.end, brk.start, brk.end):
                    raise ConsistencyError(
                        f'Break {brk.start.isoformat()} to {brk.end.isoformat()} lies outside booking {booking.id}'
                    )
                entries.append(_entry(booking, brk.start, brk.end, EntryStatus.ON_BREAK))

        seat = cls(
            id=id,
            location=location,
            seat_number=seat_number,
            entries=sorted(entries, key=lambda e: (e.start, e.end)),
            created_at=created_at,
        )
        seat._check_break_entries()
        return seat

    def active_entries(self) -> List[SeatEntry]:
        return [e for e in self.entries if e.status == EntryStatus.ACTIVE]

    def break_entries(self) -> List[SeatEntry]:
        return [e for e in self.entries if e.status == EntryStatus.ON_BREAK]

    def _check_break_entries(self) -> None:
        breaks = self.break_entries()
        for i, a in enumerate(breaks):
            for b in breaks[i + 1 :]:
                if overlaps(a.start, a.end, b.start, b.end):
                    raise ConsistencyError(
                        f'Seat {self.id} has overlapping breaks (bookings {a.booking_id}, {b.booking_id})'
                    )


def _entry(booking: Booking, start: datetime, end: datetime, status: EntryStatus) -> SeatEntry:
    return SeatEntry(
        booking_id=booking.id,
        user_id=booking.user_id,
        user_name=booking.user_name,
        user_email=booking.user_email,
        start=start,
        end=end,
        status=status,
    )
