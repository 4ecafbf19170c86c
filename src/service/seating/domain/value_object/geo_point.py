from datetime import datetime

import attrs

from src.platform.exception.exceptions import ValidationError


def _check_latitude(instance: object, attribute: attrs.Attribute, value: float) -> None:
    if not -90 <= value <= 90:
        raise ValidationError('Latitude must be between -90 and 90')


def _check_longitude(instance: object, attribute: attrs.Attribute, value: float) -> None:
    if not -180 <= value <= 180:
        raise ValidationError('Longitude must be between -180 and 180')


@attrs.define(frozen=True)
class GeoPoint:
    latitude: float = attrs.field(validator=_check_latitude)
    longitude: float = attrs.field(validator=_check_longitude)


@attrs.define(frozen=True)
class UserLocation:
    """Last position a member reported; only ever read by the scheduling core"""

    user_id: int
    point: GeoPoint
    reported_at: datetime


@attrs.define(frozen=True)
class LocationReport:
    location: UserLocation
    distance_meters: float
    within_radius: bool
