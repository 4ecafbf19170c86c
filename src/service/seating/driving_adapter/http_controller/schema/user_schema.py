from datetime import datetime

from pydantic import BaseModel, Field


class LocationRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    class Config:
        json_schema_extra = {'example': {'latitude': 25.2615, 'longitude': 82.9841}}


class LocationResponse(BaseModel):
    user_id: int
    latitude: float
    longitude: float
    reported_at: datetime
    distance_meters: float
    within_radius: bool
