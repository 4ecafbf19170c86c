from datetime import datetime, timedelta
from typing import Iterable, Optional

from src.platform.exception.exceptions import ConflictError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.entity.seat_entity import Seat, SeatEntry
from src.service.seating.domain.enum.active_booking_scope import ActiveBookingScope
from src.service.seating.domain.interval import contains, overlaps


def _fmt(instant: datetime) -> str:
    return instant.isoformat()


class BookingConflictResolver:
    """
    Decides whether a candidate window may be admitted on a seat.

    Precedence when the candidate touches a holder's break:
    1. It must sit entirely inside that single break window; otherwise the
       break bounds are reported as the only bookable range.
    2. Inside the break, the holder's own `active` entry does not count as a
       conflict, but every other `active` entry still does (nobody else may
       have claimed the same part of the break).

    Without any break in play, any overlapping `active` entry rejects.
    """

    def __init__(
        self,
        *,
        min_booking_minutes: int = 30,
        active_booking_scope: ActiveBookingScope = ActiveBookingScope.GLOBAL,
    ) -> None:
        self.min_duration = timedelta(minutes=min_booking_minutes)
        self.active_booking_scope = ActiveBookingScope(active_booking_scope)

    @Logger.io
    def validate_window(self, *, start: datetime, end: datetime, now: datetime) -> None:
        if start >= end:
            raise ValidationError('End time must be after start time')
        if start < now:
            raise ValidationError('Cannot book a seat in the past')
        if end - start < self.min_duration:
            raise ValidationError(
                f'Booking must be at least {int(self.min_duration.total_seconds() // 60)} minutes'
            )

    @Logger.io
    def check_requester(
        self, *, seat: Seat, requester_bookings: Iterable[Booking], now: datetime
    ) -> None:
        """One live booking per member, within the configured scope"""
        if self.active_booking_scope == ActiveBookingScope.UNRESTRICTED:
            return

        for booking in requester_bookings:
            if not booking.is_live_at(now):
                continue
            if (
                self.active_booking_scope == ActiveBookingScope.LOCATION
                and booking.location != seat.location
            ):
                continue
            raise ConflictError(
                f'You already have an active booking (seat {booking.seat_number} at '
                f'{booking.location}, {_fmt(booking.start)} to {_fmt(booking.end)})'
            )

    @Logger.io
    def check_seat(self, *, seat: Seat, start: datetime, end: datetime, now: datetime) -> None:
        reason = self._seat_conflict(seat, start=start, end=end, now=now)
        if reason:
            raise ConflictError(reason)

    def is_seat_bookable(
        self, *, seat: Seat, start: datetime, end: datetime, now: datetime
    ) -> bool:
        """Same rules as check_seat, without raising (seat search)"""
        return self._seat_conflict(seat, start=start, end=end, now=now) is None

    def _seat_conflict(
        self, seat: Seat, *, start: datetime, end: datetime, now: datetime
    ) -> Optional[str]:
        live_breaks = [
            e
            for e in seat.break_entries()
            if e.end > now and overlaps(e.start, e.end, start, end)
        ]
        exempt_booking_id = None

        if live_breaks:
            covering = self._covering_break(live_breaks, start=start, end=end)
            if covering is None:
                nearest = live_breaks[0]
                return (
                    f'Requested time overlaps a break; only {_fmt(nearest.start)} to '
                    f'{_fmt(nearest.end)} is bookable within it'
                )
            exempt_booking_id = covering.booking_id

        for entry in seat.active_entries():
            if entry.end <= now or entry.booking_id == exempt_booking_id:
                continue
            if overlaps(entry.start, entry.end, start, end):
                return f'Seat already booked from {_fmt(entry.start)} to {_fmt(entry.end)}'
        return None

    def admit(
        self,
        *,
        seat: Seat,
        start: datetime,
        end: datetime,
        now: datetime,
        requester_bookings: Iterable[Booking],
    ) -> None:
        """
        Run every admission rule; nothing is applied on failure.

        Raises:
            ValidationError: Inverted, past or too short window
            ConflictError: Requester already holds a booking, or the seat is taken
        """
        self.validate_window(start=start, end=end, now=now)
        self.check_requester(seat=seat, requester_bookings=requester_bookings, now=now)
        self.check_seat(seat=seat, start=start, end=end, now=now)

    @staticmethod
    def _covering_break(
        breaks: list[SeatEntry], *, start: datetime, end: datetime
    ) -> Optional[SeatEntry]:
        for brk in breaks:
            if contains(brk.start, brk.end, start, end):
                return brk
        return None
