from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.platform.types.uuid7_utils_types import UtilsUUID7


class SeatEntryResponse(BaseModel):
    booking_id: UtilsUUID7
    user_id: int
    user_name: str
    start: datetime
    end: datetime
    status: str


class SeatResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'location': 'Main Library',
                'seat_number': 12,
                'entries': [],
            }
        },
    }

    id: int
    location: str
    seat_number: int
    entries: List[SeatEntryResponse] = []


class FreeSlotResponse(BaseModel):
    start: datetime
    end: Optional[datetime] = None  # open-ended
    duration_minutes: Optional[int] = None


class BreakWindowResponse(BaseModel):
    booking_id: UtilsUUID7
    start: datetime
    end: datetime
    free_slots: List[FreeSlotResponse] = []


class SeatAvailabilityResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'seat_id': 1,
                'status': 'limited',
                'window_start': '2025-01-10T09:00:00Z',
                'window_end': '2025-01-10T18:00:00Z',
                'free_slots': [
                    {
                        'start': '2025-01-10T12:00:00Z',
                        'end': '2025-01-10T18:00:00Z',
                        'duration_minutes': 360,
                    }
                ],
                'break_windows': [],
            }
        },
    }

    seat_id: int
    status: str
    window_start: datetime
    window_end: Optional[datetime] = None
    free_slots: List[FreeSlotResponse] = []
    break_windows: List[BreakWindowResponse] = []
