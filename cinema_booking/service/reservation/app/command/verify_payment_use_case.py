from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from cinema_booking.platform.exception.exceptions import ForbiddenError, NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.metrics.booking_metrics import metrics
from cinema_booking.service.reservation.app.interface.i_payment_gateway import IPaymentGateway
from cinema_booking.service.reservation.domain.booking_errors import PaymentGatewayError
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking, PaymentStatus
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser


class VerifyPaymentUseCase:
    """
    Settle a pending payment from the gateway's lookup result.

    Outcomes:
    - reference mismatch: ReferenceMismatchError, nothing changes (paid bookings too)
    - already paid with the same reference: returned unchanged, no lookup
    - not pending: PaymentNotPendingError, no lookup
    - Completed with a matching amount: paid, paid_at set
    - any other status or amount: back to unpaid
    - gateway timeout/error: unpaid is committed, then PaymentGatewayError

    Transitions are applied to the row re-read under lock after the lookup.
    Payment never touches the seat hold; an unpaid booking keeps its seats.
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
    async def execute(
        self, *, booking_id: UUID, provider_reference: str, actor: AuthenticatedUser
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.verify_payment', attributes={'booking.id': str(booking_id)}
        ) as span:
            async with self.uow:
                booking = await self.uow.booking_query_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')
                if not (booking.is_owned_by(actor.id) or actor.is_admin):
                    raise ForbiddenError('Only the booking owner can verify this payment')
                booking.validate_provider_reference(provider_reference)
                if booking.payment_status == PaymentStatus.PAID:
                    return booking
                booking.validate_payment_is_pending()

                try:
                    lookup = await self.payment_gateway.lookup(
                        provider_reference=provider_reference
                    )
                except PaymentGatewayError:
                    # Never leave the booking pending on an unanswered lookup
                    locked = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
                    if locked and locked.is_pending_with(provider_reference):
                        await self.uow.booking_command_repo.update_payment(
                            booking=locked.mark_payment_as_failed()
                        )
                        await self.uow.commit()
                    metrics.record_payment(operation='verify', result='gateway_error')
                    raise

                locked = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
                if not locked:
                    raise NotFoundError('Booking not found')
                locked.validate_provider_reference(provider_reference)
                if locked.payment_status == PaymentStatus.PAID:
                    return locked

                span.set_attribute('payment.status', lookup.status.value)
                amount_matches = lookup.covers(locked.total_price)
                if lookup.is_completed and amount_matches:
                    updated = locked.mark_as_paid()
                else:
                    locked.validate_payment_is_pending()
                    updated = locked.mark_payment_as_failed()
                await self.uow.booking_command_repo.update_payment(booking=updated)
                await self.uow.commit()

        if lookup.is_completed and not amount_matches:
            Logger.base.warning(
                f'⚠️ [PAYMENT] Booking {booking_id} completed with {lookup.total_amount} '
                f'but costs {locked.total_price}; left unpaid'
            )
            metrics.record_payment(operation='verify', result='amount_mismatch')
        else:
            metrics.record_payment(operation='verify', result=updated.payment_status.value)
        Logger.base.info(
            f'💳 [PAYMENT] Booking {booking_id} verified as {updated.payment_status.value} '
            f'(gateway: {lookup.status.value})'
        )
        return updated
