from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_user_location_repo import IUserLocationRepo
from src.service.seating.domain.attendance_geofence_checker import AttendanceGeofenceChecker
from src.service.seating.domain.value_object.geo_point import (
    GeoPoint,
    LocationReport,
    UserLocation,
)


class ReportLocationUseCase:
    """Store the member's current position and tell them how far the venue is"""

    def __init__(
        self,
        *,
        user_location_repo: IUserLocationRepo,
        geofence_checker: AttendanceGeofenceChecker,
        clock: IClock,
    ) -> None:
        self.user_location_repo = user_location_repo
        self.geofence_checker = geofence_checker
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        user_location_repo: IUserLocationRepo = Depends(Provide[Container.user_location_repo]),
        geofence_checker: AttendanceGeofenceChecker = Depends(
            Provide[Container.attendance_geofence_checker]
        ),
        clock: IClock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            user_location_repo=user_location_repo,
            geofence_checker=geofence_checker,
            clock=clock,
        )

    @Logger.io
    async def execute(self, *, user_id: int, point: GeoPoint) -> LocationReport:
        location = await self.user_location_repo.upsert(
            location=UserLocation(user_id=user_id, point=point, reported_at=self.clock.now())
        )
        return LocationReport(
            location=location,
            distance_meters=self.geofence_checker.distance_from_venue(point),
            within_radius=self.geofence_checker.is_present(location),
        )
