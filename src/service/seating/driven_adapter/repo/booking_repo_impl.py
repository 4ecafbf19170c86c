from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.domain.entity.booking_entity import (
    LIVE_STATUSES,
    Booking,
    BookingStatus,
    Break,
)
from src.service.seating.driven_adapter.model.booking_model import BookingBreakModel, BookingModel


_LIVE = [status.value for status in LIVE_STATUSES]


def _pg_uuid(value: UUID) -> uuid.UUID:
    return uuid.UUID(str(value))


class BookingRepoImpl(IBookingRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        """SQLAlchemy hands back stdlib uuid.UUID, the domain works with uuid_utils.UUID"""
        return Booking(
            id=UUID(str(db_booking.id)),
            user_id=db_booking.user_id,
            user_name=db_booking.user_name,
            user_email=db_booking.user_email,
            seat_id=db_booking.seat_id,
            location=db_booking.location,
            seat_number=db_booking.seat_number,
            start=db_booking.start_time,
            end=db_booking.end_time,
            status=BookingStatus(db_booking.status),
            breaks=[Break(start=b.start_time, end=b.end_time) for b in db_booking.breaks],
            attendance_confirmed=db_booking.attendance_confirmed,
            attendance_confirmed_at=db_booking.attendance_confirmed_at,
            cancellation_reason=db_booking.cancellation_reason,
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
        )

    @staticmethod
    def _to_break_models(booking: Booking) -> List[BookingBreakModel]:
        return [BookingBreakModel(start_time=b.start, end_time=b.end) for b in booking.breaks]

    async def _list(self, *conditions, order_desc: bool = False) -> List[Booking]:
        order = BookingModel.start_time.desc() if order_desc else BookingModel.start_time
        async with self._get_session() as session:
            result = await session.execute(select(BookingModel).where(*conditions).order_by(order))
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            db_booking = await session.get(BookingModel, _pg_uuid(booking_id))
            return self._to_entity(db_booking) if db_booking else None

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            db_booking = BookingModel(
                id=_pg_uuid(booking.id),
                user_id=booking.user_id,
                user_name=booking.user_name,
                user_email=booking.user_email,
                seat_id=booking.seat_id,
                location=booking.location,
                seat_number=booking.seat_number,
                start_time=booking.start,
                end_time=booking.end,
                status=booking.status.value,
                attendance_confirmed=booking.attendance_confirmed,
                attendance_confirmed_at=booking.attendance_confirmed_at,
                cancellation_reason=booking.cancellation_reason,
                breaks=self._to_break_models(booking),
            )
            session.add(db_booking)
            await session.commit()
            await session.refresh(db_booking)
            return self._to_entity(db_booking)

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            db_booking = await session.get(BookingModel, _pg_uuid(booking.id))
            if not db_booking:
                raise NotFoundError('Booking not found')

            db_booking.status = booking.status.value
            db_booking.attendance_confirmed = booking.attendance_confirmed
            db_booking.attendance_confirmed_at = booking.attendance_confirmed_at
            db_booking.cancellation_reason = booking.cancellation_reason
            stored = {(b.start_time, b.end_time) for b in db_booking.breaks}
            if stored != {(b.start, b.end) for b in booking.breaks}:
                db_booking.breaks = self._to_break_models(booking)

            await session.commit()
            await session.refresh(db_booking)
            return self._to_entity(db_booking)

    @Logger.io
    async def delete(self, *, booking_id: UUID) -> None:
        async with self._get_session() as session:
            await session.execute(delete(BookingModel).where(BookingModel.id == _pg_uuid(booking_id)))
            await session.commit()

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        return await self._list(BookingModel.user_id == user_id, order_desc=True)

    @Logger.io
    async def list_live_by_user(self, *, user_id: int) -> List[Booking]:
        return await self._list(BookingModel.user_id == user_id, BookingModel.status.in_(_LIVE))

    @Logger.io
    async def list_pending_attendance(self) -> List[Booking]:
        return await self._list(
            BookingModel.status.in_(_LIVE), BookingModel.attendance_confirmed.is_(False)
        )

    @Logger.io
    async def list_live_ended_before(self, *, now: datetime) -> List[Booking]:
        return await self._list(BookingModel.status.in_(_LIVE), BookingModel.end_time <= now)
