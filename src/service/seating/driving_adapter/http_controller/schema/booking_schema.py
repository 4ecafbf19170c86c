from datetime import datetime
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, Field

from src.platform.types.uuid7_utils_types import UtilsUUID7


class BookingCreateRequest(BaseModel):
    seat_id: int
    start: AwareDatetime
    end: AwareDatetime

    class Config:
        json_schema_extra = {
            'example': {
                'seat_id': 1,
                'start': '2025-01-10T09:00:00+05:30',
                'end': '2025-01-10T12:00:00+05:30',
            }
        }


class BreakCreateRequest(BaseModel):
    start: AwareDatetime
    end: AwareDatetime

    class Config:
        json_schema_extra = {
            'example': {'start': '2025-01-10T10:00:00+05:30', 'end': '2025-01-10T10:40:00+05:30'}
        }


class AttendanceRequest(BaseModel):
    """Coordinates are optional; without them the last reported location is used"""

    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    class Config:
        json_schema_extra = {'example': {'latitude': 25.261071, 'longitude': 82.983812}}


class BreakResponse(BaseModel):
    start: datetime
    end: datetime


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 2,
                'seat_id': 1,
                'location': 'Main Library',
                'seat_number': 12,
                'start': '2025-01-10T03:30:00Z',
                'end': '2025-01-10T06:30:00Z',
                'status': 'active',
                'attendance': 'pending',
                'breaks': [],
                'cancellation_reason': None,
            }
        },
    }

    id: UtilsUUID7  # UUID7
    user_id: int
    seat_id: int
    location: str
    seat_number: int
    start: datetime
    end: datetime
    status: str
    attendance: str
    attendance_confirmed_at: Optional[datetime] = None
    breaks: List[BreakResponse] = []
    cancellation_reason: Optional[str] = None
    created_at: Optional[datetime] = None
