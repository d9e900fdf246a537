from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.interface.i_booking_query_repo import (
    IBookingQueryRepo,
)
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking, BookingStatus
from cinema_booking.service.reservation.driven_adapter.model.booking_model import BookingModel
from cinema_booking.service.reservation.driven_adapter.repo.booking_mapper import (
    to_db_uuid,
    to_entity,
)


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None,
        *,
        session: AsyncSession | None = None,
    ):
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == to_db_uuid(booking_id))
            )
            db_booking = result.scalar_one_or_none()
            return to_entity(db_booking) if db_booking else None

    @Logger.io
    async def get_booked_seats(self, *, showtime_id: int) -> set[str]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel.seats).where(
                    BookingModel.showtime_id == showtime_id,
                    BookingModel.status == BookingStatus.CONFIRMED.value,
                )
            )
            booked: set[str] = set()
            for seats in result.scalars().all():
                booked.update(seats or [])
            return booked

    @Logger.io
    async def list_by_user(
        self, *, user_id: int, status: Optional[BookingStatus] = None
    ) -> List[Booking]:
        stmt = select(BookingModel).where(BookingModel.user_id == user_id)
        if status is not None:
            stmt = stmt.where(BookingModel.status == status.value)
        return await self._list(stmt)

    @Logger.io
    async def list_all(self) -> List[Booking]:
        return await self._list(select(BookingModel))

    async def _list(self, stmt) -> List[Booking]:
        # UUID7 ids are time-ordered, so they break created_at ties
        stmt = stmt.order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [to_entity(db_booking) for db_booking in result.scalars().all()]
