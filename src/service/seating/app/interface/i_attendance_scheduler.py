from abc import ABC, abstractmethod
from datetime import datetime

from uuid_utils import UUID


class IAttendanceScheduler(ABC):
    @abstractmethod
    async def schedule(self, *, booking_id: UUID, deadline: datetime) -> None:
        """
        Register the attendance deadline of a booking.

        A deadline already in the past is due immediately.
        """
        pass

    @abstractmethod
    async def cancel(self, *, booking_id: UUID) -> None:
        """Drop the pending deadline (attendance confirmed or booking cancelled)"""
        pass
