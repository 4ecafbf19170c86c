from typing import Optional

from src.platform.exception.exceptions import PresenceError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.geo_distance import haversine_distance
from src.service.seating.domain.value_object.geo_point import GeoPoint, UserLocation


class AttendanceGeofenceChecker:
    """Is the member within `radius_meters` of the venue? Boundary counts as inside."""

    def __init__(self, *, venue: GeoPoint, radius_meters: float) -> None:
        self.venue = venue
        self.radius_meters = radius_meters

    def distance_from_venue(self, point: GeoPoint) -> float:
        return haversine_distance(point, self.venue)

    def is_present(self, location: UserLocation) -> bool:
        return self.distance_from_venue(location.point) <= self.radius_meters

    @Logger.io
    def verify(self, location: Optional[UserLocation]) -> float:
        """
        Returns:
            Distance from the venue in meters

        Raises:
            PresenceError: No known location, or outside the radius
        """
        if location is None:
            raise PresenceError('User location not available')

        distance = self.distance_from_venue(location.point)
        if distance > self.radius_meters:
            raise PresenceError(
                f'User not within required distance of the venue '
                f'({distance:.0f}m away, limit {self.radius_meters:.0f}m)'
            )
        return distance
