from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import ForbiddenError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.interface.i_booking_query_repo import (
    IBookingQueryRepo,
)
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking, BookingStatus
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser


class ListBookingsUseCase:
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
    async def list_user_bookings(self, *, user_id: int) -> List[Booking]:
        """Booking history: confirmed bookings only, newest first"""
        return await self.booking_query_repo.list_by_user(
            user_id=user_id, status=BookingStatus.CONFIRMED
        )

    @Logger.io
    async def list_all_bookings(self, *, actor: AuthenticatedUser) -> List[Booking]:
        if not actor.is_admin:
            raise ForbiddenError('Only admins can list all bookings')
        return await self.booking_query_repo.list_all()
