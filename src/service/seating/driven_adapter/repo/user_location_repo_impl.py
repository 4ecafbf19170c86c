from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_user_location_repo import IUserLocationRepo
from src.service.seating.domain.value_object.geo_point import GeoPoint, UserLocation
from src.service.seating.driven_adapter.model.user_location_model import UserLocationModel


class UserLocationRepoImpl(IUserLocationRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def get(self, *, user_id: int) -> Optional[UserLocation]:
        async with self._get_session() as session:
            row = await session.get(UserLocationModel, user_id)
            if not row:
                return None
            return UserLocation(
                user_id=row.user_id,
                point=GeoPoint(latitude=row.latitude, longitude=row.longitude),
                reported_at=row.reported_at,
            )

    @Logger.io
    async def upsert(self, *, location: UserLocation) -> UserLocation:
        values = {
            'latitude': location.point.latitude,
            'longitude': location.point.longitude,
            'reported_at': location.reported_at,
        }
        async with self._get_session() as session:
            await session.execute(
                insert(UserLocationModel)
                .values(user_id=location.user_id, **values)
                .on_conflict_do_update(index_elements=['user_id'], set_=values)
            )
            await session.commit()
        return location
