from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.report_location_use_case import ReportLocationUseCase
from src.service.seating.domain.value_object.geo_point import GeoPoint
from src.service.seating.domain.value_object.member import Member
from src.service.seating.driving_adapter.http_controller.auth.current_member import (
    get_current_member,
)
from src.service.seating.driving_adapter.http_controller.schema.user_schema import (
    LocationRequest,
    LocationResponse,
)


router = APIRouter()


@router.post('/location')
@Logger.io
async def report_location(
    request: LocationRequest,
    current_member: Member = Depends(get_current_member),
    use_case: ReportLocationUseCase = Depends(ReportLocationUseCase.depends),
) -> LocationResponse:
    report = await use_case.execute(
        user_id=current_member.id,
        point=GeoPoint(latitude=request.latitude, longitude=request.longitude),
    )
    return LocationResponse(
        user_id=report.location.user_id,
        latitude=report.location.point.latitude,
        longitude=report.location.point.longitude,
        reported_at=report.location.reported_at,
        distance_meters=round(report.distance_meters, 2),
        within_radius=report.within_radius,
    )
