from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.query.get_availability_use_case import GetAvailabilityUseCase
from src.service.seating.app.query.list_available_seats_use_case import (
    ListAvailableSeatsUseCase,
)
from src.service.seating.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.value_object.availability import FreeSlot, SeatAvailability
from src.service.seating.driving_adapter.http_controller.schema.seat_schema import (
    BreakWindowResponse,
    FreeSlotResponse,
    SeatAvailabilityResponse,
    SeatEntryResponse,
    SeatResponse,
)


router = APIRouter()


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Query strings without an offset are read as UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _slot(slot: FreeSlot) -> FreeSlotResponse:
    return FreeSlotResponse(start=slot.start, end=slot.end, duration_minutes=slot.duration_minutes)


def _to_seat_response(seat: Seat) -> SeatResponse:
    return SeatResponse(
        id=seat.id,
        location=seat.location,
        seat_number=seat.seat_number,
        entries=[
            SeatEntryResponse(
                booking_id=e.booking_id,
                user_id=e.user_id,
                user_name=e.user_name,
                start=e.start,
                end=e.end,
                status=e.status.value,
            )
            for e in seat.entries
        ],
    )


def _to_availability_response(availability: SeatAvailability) -> SeatAvailabilityResponse:
    return SeatAvailabilityResponse(
        seat_id=availability.seat_id,
        status=availability.status.value,
        window_start=availability.window_start,
        window_end=availability.window_end,
        free_slots=[_slot(s) for s in availability.free_slots],
        break_windows=[
            BreakWindowResponse(
                booking_id=w.booking_id,
                start=w.start,
                end=w.end,
                free_slots=[_slot(s) for s in w.free_slots],
            )
            for w in availability.break_windows
        ],
    )


@router.get('', response_model=List[SeatResponse])
@Logger.io
async def list_seats(
    location: Optional[str] = None,
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> List[SeatResponse]:
    seats = await use_case.list_seats(location=location)
    return [_to_seat_response(s) for s in seats]


@router.get('/available', response_model=List[SeatResponse])
@Logger.io
async def list_available_seats(
    start: datetime,
    end: datetime,
    location: Optional[str] = None,
    use_case: ListAvailableSeatsUseCase = Depends(ListAvailableSeatsUseCase.depends),
) -> List[SeatResponse]:
    seats = await use_case.execute(start=_as_utc(start), end=_as_utc(end), location=location)
    return [_to_seat_response(s) for s in seats]


@router.get('/{seat_id}')
@Logger.io
async def get_seat(
    seat_id: int,
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> SeatResponse:
    return _to_seat_response(await use_case.get_seat(seat_id=seat_id))


@router.get('/{seat_id}/availability')
@Logger.io
async def get_availability(
    seat_id: int,
    query_start: Optional[datetime] = None,
    query_end: Optional[datetime] = None,
    use_case: GetAvailabilityUseCase = Depends(GetAvailabilityUseCase.depends),
) -> SeatAvailabilityResponse:
    availability = await use_case.execute(
        seat_id=seat_id, query_start=_as_utc(query_start), query_end=_as_utc(query_end)
    )
    return _to_availability_response(availability)
