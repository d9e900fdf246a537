from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.interface.i_showtime_query_repo import (
    IShowtimeQueryRepo,
)
from cinema_booking.service.reservation.domain.entity.showtime_entity import Showtime
from cinema_booking.service.reservation.driven_adapter.model.showtime_model import ShowtimeModel


class ShowtimeQueryRepoImpl(IShowtimeQueryRepo):
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
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_entity(db_showtime: ShowtimeModel) -> Showtime:
        return Showtime(
            id=db_showtime.id,
            movie_id=db_showtime.movie_id,
            hall_id=db_showtime.hall_id,
            hall_name=db_showtime.hall_name,
            start_time=db_showtime.start_time,
            price=db_showtime.price,
        )

    @Logger.io
    async def get_by_id(self, *, showtime_id: int) -> Optional[Showtime]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ShowtimeModel).where(ShowtimeModel.id == showtime_id)
            )
            db_showtime = result.scalar_one_or_none()
            return self._to_entity(db_showtime) if db_showtime else None

    @Logger.io
    async def list_by_movie(self, *, movie_id: int) -> List[Showtime]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ShowtimeModel)
                .where(ShowtimeModel.movie_id == movie_id)
                .order_by(ShowtimeModel.start_time, ShowtimeModel.id)
            )
            return [self._to_entity(db_showtime) for db_showtime in result.scalars().all()]
