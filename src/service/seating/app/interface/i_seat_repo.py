"""
Seat Repository Interface

Seats come back with their entry list already projected from live bookings.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.seating.domain.entity.seat_entity import Seat


class ISeatRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, seat_id: int) -> Optional[Seat]:
        """
        Get seat with entries rebuilt from its live bookings

        Args:
            seat_id: Seat ID

        Returns:
            Seat or None if not found
        """
        pass

    @abstractmethod
    async def list_seats(self, *, location: Optional[str] = None) -> List[Seat]:
        """List seats ordered by (location, seat_number), optionally for one location"""
        pass

    @abstractmethod
    async def ensure_seats(self, *, location: str, seat_numbers: List[int]) -> int:
        """
        Create the missing seats of a location (existing ones are left alone)

        Returns:
            Number of seats created
        """
        pass
