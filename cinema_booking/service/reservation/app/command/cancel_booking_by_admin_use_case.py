from typing import Self

from fastapi import Depends
from uuid_utils import UUID

from cinema_booking.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from cinema_booking.platform.exception.exceptions import ForbiddenError, NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.metrics.booking_metrics import metrics
from cinema_booking.service.reservation.domain.booking_errors import AlreadyCancelledError
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking, CancelledBy
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser


class CancelBookingByAdminUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, booking_id: UUID, actor: AuthenticatedUser) -> Booking:
        if not actor.is_admin:
            raise ForbiddenError('Only admins can cancel bookings on behalf of users')

        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')

            cancelled = await self.uow.booking_command_repo.cancel(
                booking=booking.cancel(by=CancelledBy.ADMIN)
            )
            if cancelled is None:
                raise AlreadyCancelledError()
            await self.uow.commit()

        metrics.record_transition(transition='cancelled_by_admin')
        Logger.base.info(f'🚫 [CANCEL] Admin {actor.id} cancelled booking {booking_id}')
        return cancelled
