from datetime import datetime, timedelta

from src.platform.exception.exceptions import (
    ConflictError,
    ForbiddenError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.booking_entity import Booking, Break
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.interval import contains, overlaps


class BreakManager:
    """
    Carves a break out of a member's own booking.

    The booking keeps holding the seat; the break window becomes bookable by
    others. Breaks of two different bookings on one seat may not overlap.
    """

    def __init__(self, *, min_break_minutes: int = 30) -> None:
        self.min_duration = timedelta(minutes=min_break_minutes)

    @Logger.io
    def add_break(
        self,
        *,
        booking: Booking,
        seat: Seat,
        requester_id: int,
        start: datetime,
        end: datetime,
        now: datetime,
    ) -> Booking:
        if booking.user_id != requester_id:
            raise ForbiddenError('Only the booking holder can add a break')
        if not booking.is_live_at(now):
            raise ValidationError(f'Cannot add a break to a {booking.effective_status(now)} booking')
        if start >= end:
            raise ValidationError('Break end must be after break start')
        if not contains(booking.start, booking.end, start, end):
            raise ValidationError('Break must be within the booking time')
        if end < now:
            raise ValidationError('Break cannot end in the past')
        if end - start < self.min_duration:
            raise ValidationError(
                f'Break must be at least {int(self.min_duration.total_seconds() // 60)} minutes'
            )

        for sibling in booking.breaks:
            if overlaps(sibling.start, sibling.end, start, end):
                raise ConflictError(
                    f'Break overlaps an existing break from {sibling.start.isoformat()} '
                    f'to {sibling.end.isoformat()}'
                )

        for entry in seat.break_entries():
            if entry.booking_id != booking.id and overlaps(entry.start, entry.end, start, end):
                raise ConflictError("Break overlaps another booking's break on this seat")

        return booking.add_break(brk=Break(start=start, end=end), now=now)
