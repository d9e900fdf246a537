from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import ForbiddenError, NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.interface.i_booking_query_repo import (
    IBookingQueryRepo,
)
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser


class GetBookingUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def execute(self, *, booking_id: UUID, actor: AuthenticatedUser) -> Booking:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')

        if not (booking.is_owned_by(actor.id) or actor.is_admin):
            raise ForbiddenError('You can only view your own bookings')

        return booking
