"""
Durable attendance deadlines

Survives restarts; the scheduler polls it for due bookings.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from uuid_utils import UUID


class IAttendanceDeadlineStore(ABC):
    @abstractmethod
    async def put(self, *, booking_id: UUID, due_at: datetime) -> None:
        """Register or move the deadline of a booking"""
        pass

    @abstractmethod
    async def remove(self, *, booking_id: UUID) -> None:
        pass

    @abstractmethod
    async def due(self, *, now: datetime, limit: int) -> List[UUID]:
        """Booking ids whose deadline is at or before `now`, earliest first (not removed)"""
        pass

    @abstractmethod
    async def get(self, *, booking_id: UUID) -> Optional[datetime]:
        pass
