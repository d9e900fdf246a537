from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.config.di import Container
from cinema_booking.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from cinema_booking.platform.exception.exceptions import ForbiddenError, NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.metrics.booking_metrics import metrics
from cinema_booking.service.reservation.app.interface.i_payment_gateway import IPaymentGateway
from cinema_booking.service.reservation.domain.booking_errors import PaymentGatewayError
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser
from cinema_booking.service.reservation.domain.value_object.payment import PaymentInitiation


class InitiatePaymentUseCase:
    """
    Start a gateway payment for a confirmed, unpaid booking.

    The gateway is called before any row is locked; the booking is re-read
    under lock and re-validated before it is marked pending. A gateway failure
    leaves the booking untouched.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, payment_gateway: IPaymentGateway) -> None:
        self.uow = uow
        self.payment_gateway = payment_gateway
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
    ) -> Self:
        return cls(uow=uow, payment_gateway=payment_gateway)

    @Logger.io
    async def execute(self, *, booking_id: UUID, actor: AuthenticatedUser) -> PaymentInitiation:
        with self.tracer.start_as_current_span(
            'use_case.initiate_payment', attributes={'booking.id': str(booking_id)}
        ):
            async with self.uow:
                booking = await self.uow.booking_query_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')
                if not (booking.is_owned_by(actor.id) or actor.is_admin):
                    raise ForbiddenError('Only the booking owner can pay for this booking')
                booking.validate_can_start_payment()

                try:
                    initiation = await self.payment_gateway.initiate(
                        booking=booking, return_url=settings.PAYMENT_RETURN_URL
                    )
                except PaymentGatewayError:
                    metrics.record_payment(operation='initiate', result='gateway_error')
                    raise

                locked = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
                if not locked:
                    raise NotFoundError('Booking not found')
                pending = locked.start_payment(provider_reference=initiation.provider_reference)
                await self.uow.booking_command_repo.update_payment(booking=pending)
                await self.uow.commit()

        metrics.record_payment(operation='initiate', result='pending')
        Logger.base.info(
            f'💳 [PAYMENT] Booking {booking_id} pending with reference {initiation.provider_reference}'
        )
        return initiation
