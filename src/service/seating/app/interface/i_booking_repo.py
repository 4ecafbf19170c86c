"""
Booking Repository Interface

Booking rows (and their breaks) are the single source of truth for seat state.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from uuid_utils import UUID

from src.service.seating.domain.entity.booking_entity import Booking


class IBookingRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """Insert booking in its own transaction"""
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        """
        Persist status, attendance fields, cancellation reason and the full break list

        Raises:
            NotFoundError: Booking row vanished
        """
        pass

    @abstractmethod
    async def delete(self, *, booking_id: UUID) -> None:
        """Remove booking and its breaks (compensation for a half-applied admission)"""
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        """All bookings of a member, newest start first"""
        pass

    @abstractmethod
    async def list_live_by_user(self, *, user_id: int) -> List[Booking]:
        pass

    @abstractmethod
    async def list_pending_attendance(self) -> List[Booking]:
        """Live bookings whose attendance is not confirmed yet (scheduler recovery scan)"""
        pass

    @abstractmethod
    async def list_live_ended_before(self, *, now: datetime) -> List[Booking]:
        """Live bookings already past their end, awaiting completion"""
        pass
