from datetime import datetime, timedelta, timezone

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.interface.i_payment_gateway import IPaymentGateway
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking
from cinema_booking.service.reservation.domain.value_object.payment import (
    MINOR_UNITS_PER_RUPEE,
    GatewayPaymentStatus,
    PaymentInitiation,
    PaymentLookup,
)


MOCK_REFERENCE_PREFIX = 'MOCK_PIDX_'


class MockPaymentGatewayImpl(IPaymentGateway):
    """In-process gateway for local runs and tests; every known payment completes"""

    def __init__(self) -> None:
        self._amounts: dict[str, int] = {}

    @Logger.io
    async def initiate(self, *, booking: Booking, return_url: str) -> PaymentInitiation:
        reference = f'{MOCK_REFERENCE_PREFIX}{booking.id.hex}'
        self._amounts[reference] = booking.total_price * MINOR_UNITS_PER_RUPEE
        return PaymentInitiation(
            provider_reference=reference,
            redirect_url=f'{return_url}?pidx={reference}',
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=30),
        )

    @Logger.io
    async def lookup(self, *, provider_reference: str) -> PaymentLookup:
        if provider_reference.startswith(MOCK_REFERENCE_PREFIX):
            status = GatewayPaymentStatus.COMPLETED
        else:
            status = GatewayPaymentStatus.EXPIRED
        return PaymentLookup(
            provider_reference=provider_reference,
            status=status,
            transaction_id=f'MOCK_TXN_{provider_reference[-8:]}',
            total_amount=self._amounts.get(provider_reference),
        )
