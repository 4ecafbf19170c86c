from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.interface.i_attendance_scheduler import IAttendanceScheduler
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_lock import ISeatLock, seat_lock_key
from src.service.seating.app.interface.i_user_location_repo import IUserLocationRepo
from src.service.seating.domain.attendance_geofence_checker import AttendanceGeofenceChecker
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.value_object.geo_point import GeoPoint, UserLocation


class ConfirmAttendanceUseCase:
    """
    Member proves they reached the seat.

    Flow:
    1. If the request carries coordinates, record them as the member's last
       known location first (a failed check still leaves the fresh position)
    2. Booking must exist, belong to the member, and not be cancelled/completed
    3. Geofence check against the last known location
       - none recorded → PresenceError "location not available"
       - outside radius → PresenceError with the distance
    4. Mark confirmed and drop the pending auto-cancel deadline

    Confirming twice returns the confirmed booking unchanged.
    """

    def __init__(
        self,
        *,
        booking_repo: IBookingRepo,
        user_location_repo: IUserLocationRepo,
        seat_lock: ISeatLock,
        attendance_scheduler: IAttendanceScheduler,
        geofence_checker: AttendanceGeofenceChecker,
        clock: IClock,
    ) -> None:
        self.booking_repo = booking_repo
        self.user_location_repo = user_location_repo
        self.seat_lock = seat_lock
        self.attendance_scheduler = attendance_scheduler
        self.geofence_checker = geofence_checker
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        user_location_repo: IUserLocationRepo = Depends(Provide[Container.user_location_repo]),
        seat_lock: ISeatLock = Depends(Provide[Container.seat_lock]),
        attendance_scheduler: IAttendanceScheduler = Depends(
            Provide[Container.attendance_scheduler]
        ),
        geofence_checker: AttendanceGeofenceChecker = Depends(
            Provide[Container.attendance_geofence_checker]
        ),
        clock: IClock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            booking_repo=booking_repo,
            user_location_repo=user_location_repo,
            seat_lock=seat_lock,
            attendance_scheduler=attendance_scheduler,
            geofence_checker=geofence_checker,
            clock=clock,
        )

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, user_id: int, point: Optional[GeoPoint] = None
    ) -> Booking:
        with (
            metrics.track_booking_operation('confirm_attendance'),
            self.tracer.start_as_current_span(
                'use_case.confirm_attendance',
                attributes={'booking.id': str(booking_id), 'user.id': user_id},
            ),
        ):
            if point is not None:
                await self.user_location_repo.upsert(
                    location=UserLocation(user_id=user_id, point=point, reported_at=self.clock.now())
                )

            booking = await self.booking_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')
            if booking.user_id != user_id:
                raise ForbiddenError('Only the booking holder can confirm attendance')
            if booking.attendance_confirmed:
                return booking

            async with self.seat_lock.hold(seat_lock_key(booking.seat_id)):
                booking = await self.booking_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')

                # Status rules first: a cancelled booking is not revived by walking in
                confirmed = booking.confirm_attendance(now=self.clock.now())
                if confirmed is booking:
                    return booking

                location = await self.user_location_repo.get(user_id=user_id)
                distance = self.geofence_checker.verify(location)
                confirmed = await self.booking_repo.update(booking=confirmed)

            await self.attendance_scheduler.cancel(booking_id=booking_id)
            Logger.base.info(
                f'📍 [ATTENDANCE] {booking_id} confirmed for user {user_id} ({distance:.0f}m from venue)'
            )
            return confirmed
