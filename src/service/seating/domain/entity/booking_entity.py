from datetime import datetime, timedelta
from enum import StrEnum
from typing import List, Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger


class BookingStatus(StrEnum):
    ACTIVE = 'active'
    ON_BREAK = 'on_break'  # Still holds the seat, donates its break windows
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


LIVE_STATUSES = (BookingStatus.ACTIVE, BookingStatus.ON_BREAK)


class AttendanceState(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


USER_CANCELLATION_REASON = 'Cancelled by user'


def auto_cancel_reason(grace_minutes: int) -> str:
    return f'User did not reach seat within {grace_minutes} minutes of booking start time'


@attrs.define(frozen=True)
class Break:
    start: datetime
    end: datetime


@attrs.define
class Booking:
    id: UUID
    user_id: int
    user_name: str
    user_email: str
    seat_id: int
    location: str
    seat_number: int
    start: datetime
    end: datetime
    status: BookingStatus = BookingStatus.ACTIVE
    breaks: List[Break] = attrs.field(factory=list)
    attendance_confirmed: bool = False
    attendance_confirmed_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        user_id: int,
        user_name: str,
        user_email: str,
        seat_id: int,
        location: str,
        seat_number: int,
        start: datetime,
        end: datetime,
        now: datetime,
    ) -> 'Booking':
        return cls(
            id=id,
            user_id=user_id,
            user_name=user_name,
            user_email=user_email,
            seat_id=seat_id,
            location=location,
            seat_number=seat_number,
            start=start,
            end=end,
            status=BookingStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_live(self) -> bool:
        return self.status in LIVE_STATUSES

    def is_live_at(self, now: datetime) -> bool:
        """Live and not yet past its end (a stored `active` row can be lazily completed)"""
        return self.is_live and self.end > now

    def effective_status(self, now: datetime) -> BookingStatus:
        if self.is_live and self.end <= now:
            return BookingStatus.COMPLETED
        return self.status

    @property
    def attendance_state(self) -> AttendanceState:
        if self.attendance_confirmed:
            return AttendanceState.CONFIRMED
        if self.status == BookingStatus.CANCELLED:
            return AttendanceState.CANCELLED
        return AttendanceState.PENDING

    def attendance_deadline(self, *, grace_minutes: int) -> datetime:
        return self.start + timedelta(minutes=grace_minutes)

    @Logger.io
    def add_break(self, *, brk: Break, now: datetime) -> 'Booking':
        breaks = sorted([*self.breaks, brk], key=lambda b: b.start)
        return attrs.evolve(self, breaks=breaks, status=BookingStatus.ON_BREAK, updated_at=now)

    @Logger.io
    def cancel(self, *, reason: str, now: datetime) -> 'Booking':
        """
        Cancel the booking; cancelling twice is a no-op.

        Raises:
            ValidationError: When the booking already completed
        """
        if self.status == BookingStatus.CANCELLED:
            return self
        if self.effective_status(now) == BookingStatus.COMPLETED:
            raise ValidationError('Cannot cancel a completed booking')

        return attrs.evolve(
            self,
            status=BookingStatus.CANCELLED,
            cancellation_reason=reason,
            updated_at=now,
        )

    @Logger.io
    def auto_cancel(self, *, reason: str, now: datetime) -> 'Booking':
        """
        Cancel a no-show once its attendance deadline has passed.

        Goes by the stored status only: a live unconfirmed booking is cancelled
        even when the evaluation runs after its end time.
        """
        if not self.is_live or self.attendance_confirmed:
            return self

        return attrs.evolve(
            self,
            status=BookingStatus.CANCELLED,
            cancellation_reason=reason,
            updated_at=now,
        )

    @Logger.io
    def confirm_attendance(self, *, now: datetime) -> 'Booking':
        if self.attendance_confirmed:
            return self
        if self.status == BookingStatus.CANCELLED:
            raise ValidationError('Cannot confirm attendance for a cancelled booking')
        if self.effective_status(now) == BookingStatus.COMPLETED:
            raise ValidationError('Cannot confirm attendance for a completed booking')

        return attrs.evolve(
            self, attendance_confirmed=True, attendance_confirmed_at=now, updated_at=now
        )

    @Logger.io
    def complete(self, *, now: datetime) -> 'Booking':
        return attrs.evolve(self, status=BookingStatus.COMPLETED, updated_at=now)
