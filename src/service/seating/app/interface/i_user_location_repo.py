from abc import ABC, abstractmethod
from typing import Optional

from src.service.seating.domain.value_object.geo_point import UserLocation


class IUserLocationRepo(ABC):
    @abstractmethod
    async def get(self, *, user_id: int) -> Optional[UserLocation]:
        pass

    @abstractmethod
    async def upsert(self, *, location: UserLocation) -> UserLocation:
        pass
