"""
Unit of Work Pattern - one database transaction per booking operation

Architecture:
- UoW owns the session lifecycle for one operation
- UoW owns commit/rollback
- Repositories get the shared session from the UoW
- Use cases coordinate repositories through the UoW, so the availability
  check, the booking insert and its seat claims commit or fail together
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_booking.platform.database.orm_db_setting import get_async_session


if TYPE_CHECKING:
    from cinema_booking.service.reservation.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from cinema_booking.service.reservation.app.interface.i_booking_query_repo import (
        IBookingQueryRepo,
    )
    from cinema_booking.service.reservation.app.interface.i_showtime_query_repo import (
        IShowtimeQueryRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the reservation service

    Usage:
        async with uow:
            booking = await uow.booking_command_repo.create(booking=...)
            await uow.commit()
    """

    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo
    showtime_query_repo: IShowtimeQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        # No-op after a successful commit; discards everything otherwise
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def __aenter__(self) -> AbstractUnitOfWork:
        from cinema_booking.service.reservation.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from cinema_booking.service.reservation.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from cinema_booking.service.reservation.driven_adapter.repo.showtime_query_repo_impl import (
            ShowtimeQueryRepoImpl,
        )

        # Repositories share the UoW session
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.booking_query_repo = BookingQueryRepoImpl(session=self.session)
        self.showtime_query_repo = ShowtimeQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def _commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """
    FastAPI dependency for Unit of Work (one session per request)

    Usage:
        async def reserve(uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
            async with uow:
                ...
                await uow.commit()
    """
    return SqlAlchemyUnitOfWork(session)
