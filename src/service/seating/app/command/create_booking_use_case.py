from datetime import datetime
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConsistencyError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.interface.i_attendance_scheduler import IAttendanceScheduler
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_lock import ISeatLock, seat_lock_key, user_lock_key
from src.service.seating.app.interface.i_seat_repo import ISeatRepo
from src.service.seating.domain.booking_conflict_resolver import BookingConflictResolver
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.value_object.member import Member


class CreateBookingUseCase:
    """
    Admit a new booking on a seat.

    Flow:
    1. Validate the window before touching any lock (fail fast)
    2. Take the seat lock and the requester's lock together, so two requests
       for different seats by the same member cannot both pass the
       one-live-booking rule
    3. Reload the seat projection and the requester's live bookings
    4. BookingConflictResolver.admit (break precedence, overlaps)
    5. Insert the booking, then register its attendance deadline

    If the deadline cannot be registered the booking is deleted again and
    ConsistencyError is raised: a booking nobody will ever auto-cancel must
    not survive.
    """

    def __init__(
        self,
        *,
        seat_repo: ISeatRepo,
        booking_repo: IBookingRepo,
        seat_lock: ISeatLock,
        attendance_scheduler: IAttendanceScheduler,
        conflict_resolver: BookingConflictResolver,
        clock: IClock,
        grace_minutes: int,
    ) -> None:
        self.seat_repo = seat_repo
        self.booking_repo = booking_repo
        self.seat_lock = seat_lock
        self.attendance_scheduler = attendance_scheduler
        self.conflict_resolver = conflict_resolver
        self.clock = clock
        self.grace_minutes = grace_minutes
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_repo: ISeatRepo = Depends(Provide[Container.seat_repo]),
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        seat_lock: ISeatLock = Depends(Provide[Container.seat_lock]),
        attendance_scheduler: IAttendanceScheduler = Depends(
            Provide[Container.attendance_scheduler]
        ),
        conflict_resolver: BookingConflictResolver = Depends(
            Provide[Container.booking_conflict_resolver]
        ),
        clock: IClock = Depends(Provide[Container.clock]),
        grace_minutes: int = Depends(Provide[Container.attendance_grace_minutes]),
    ) -> Self:
        return cls(
            seat_repo=seat_repo,
            booking_repo=booking_repo,
            seat_lock=seat_lock,
            attendance_scheduler=attendance_scheduler,
            conflict_resolver=conflict_resolver,
            clock=clock,
            grace_minutes=grace_minutes,
        )

    @Logger.io
    async def execute(
        self, *, seat_id: int, member: Member, start: datetime, end: datetime
    ) -> Booking:
        with (
            metrics.track_booking_operation('create_booking'),
            self.tracer.start_as_current_span(
                'use_case.create_booking',
                attributes={'seat.id': seat_id, 'user.id': member.id},
            ) as span,
        ):
            now = self.clock.now()
            self.conflict_resolver.validate_window(start=start, end=end, now=now)

            async with self.seat_lock.hold(seat_lock_key(seat_id), user_lock_key(member.id)):
                seat = await self.seat_repo.get_by_id(seat_id=seat_id)
                if not seat:
                    raise NotFoundError('Seat not found')

                requester_bookings = await self.booking_repo.list_live_by_user(user_id=member.id)
                now = self.clock.now()
                self.conflict_resolver.admit(
                    seat=seat,
                    start=start,
                    end=end,
                    now=now,
                    requester_bookings=requester_bookings,
                )

                booking = await self.booking_repo.create(
                    booking=Booking.create(
                        id=uuid_utils.uuid7(),
                        user_id=member.id,
                        user_name=member.name,
                        user_email=member.email,
                        seat_id=seat.id,
                        location=seat.location,
                        seat_number=seat.seat_number,
                        start=start,
                        end=end,
                        now=now,
                    )
                )
                span.set_attribute('booking.id', str(booking.id))

                deadline = booking.attendance_deadline(grace_minutes=self.grace_minutes)
                try:
                    await self.attendance_scheduler.schedule(booking_id=booking.id, deadline=deadline)
                except Exception as e:
                    Logger.base.error(
                        f'❌ [BOOKING] Deadline registration failed for {booking.id}, rolling back: {e}'
                    )
                    await self.booking_repo.delete(booking_id=booking.id)
                    raise ConsistencyError(
                        'Booking could not be registered for attendance tracking and was rolled back'
                    ) from e

            Logger.base.info(
                f'📝 [BOOKING] {booking.id} seat {seat.location}#{seat.seat_number} '
                f'{start.isoformat()} to {end.isoformat()} for user {member.id}, '
                f'attendance due {deadline.isoformat()}'
            )
            return booking
