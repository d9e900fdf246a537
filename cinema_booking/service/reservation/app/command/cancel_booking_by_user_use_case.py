from typing import Self

from fastapi import Depends
from uuid_utils import UUID

from cinema_booking.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.metrics.booking_metrics import metrics
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking, CancelledBy
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser


class CancelBookingByUserUseCase:
    """
    Owner cancels their own confirmed booking; the seats become available again.

    Missing, foreign and already-cancelled bookings all look the same to the
    caller, so other people's booking ids stay hidden.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, booking_id: UUID, actor: AuthenticatedUser) -> Booking:
        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if not booking or not booking.is_owned_by(actor.id) or not booking.is_confirmed:
                raise NotFoundError('Booking not found or already cancelled')

            cancelled = await self.uow.booking_command_repo.cancel(
                booking=booking.cancel(by=CancelledBy.USER), expected_user_id=actor.id
            )
            if cancelled is None:  # lost a race with another cancellation
                raise NotFoundError('Booking not found or already cancelled')
            await self.uow.commit()

        metrics.record_transition(transition='cancelled_by_user')
        Logger.base.info(f'🚫 [CANCEL] User {actor.id} cancelled booking {booking_id}')
        return cancelled
