from typing import Self

from fastapi import Depends
from uuid_utils import UUID

from cinema_booking.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from cinema_booking.platform.exception.exceptions import ForbiddenError, NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.metrics.booking_metrics import metrics
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser


class RemoveCancelledBookingUseCase:
    """Permanently delete a cancelled booking (admin housekeeping)"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, booking_id: UUID, actor: AuthenticatedUser) -> None:
        if not actor.is_admin:
            raise ForbiddenError('Only admins can remove bookings')

        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')
            booking.validate_can_be_removed()

            if not await self.uow.booking_command_repo.delete_cancelled(booking_id=booking_id):
                raise NotFoundError('Booking not found')
            await self.uow.commit()

        metrics.record_transition(transition='removed')
        Logger.base.info(f'🗑️ [REMOVE] Admin {actor.id} removed booking {booking_id}')
