"""
Khalti ePayment (v2) adapter

Every request is bounded by PAYMENT_GATEWAY_TIMEOUT_SECONDS. Timeouts,
transport failures, non-2xx responses and unknown lookup statuses all surface
as PaymentGatewayError so callers only ever handle one failure type.
"""

from datetime import datetime
from typing import Any, Optional

import httpx
import orjson

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.interface.i_payment_gateway import IPaymentGateway
from cinema_booking.service.reservation.domain.booking_errors import PaymentGatewayError
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking
from cinema_booking.service.reservation.domain.value_object.payment import (
    MINOR_UNITS_PER_RUPEE,
    GatewayPaymentStatus,
    PaymentInitiation,
    PaymentLookup,
)


class KhaltiPaymentGatewayImpl(IPaymentGateway):
    def __init__(
        self,
        *,
        base_url: str | None = None,
        secret_key: str | None = None,
        website_url: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.KHALTI_BASE_URL).rstrip('/')
        self.secret_key = secret_key or settings.KHALTI_SECRET_KEY.get_secret_value()
        self.website_url = website_url or settings.PAYMENT_WEBSITE_URL
        self.timeout_seconds = timeout_seconds or settings.PAYMENT_GATEWAY_TIMEOUT_SECONDS
        self.transport = transport  # tests plug in httpx.MockTransport

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self.transport,
                headers={'Authorization': f'Key {self.secret_key}'},
            ) as client:
                response = await client.post(path, json=payload)
        except httpx.TimeoutException as e:
            raise PaymentGatewayError(f'Payment gateway timed out on {path}') from e
        except httpx.HTTPError as e:
            raise PaymentGatewayError(f'Payment gateway request failed: {e}') from e

        if response.is_error:
            Logger.base.warning(
                f'💳 [KHALTI] {path} returned {response.status_code}: {response.text[:200]}'
            )
            raise PaymentGatewayError(f'Payment gateway rejected request ({response.status_code})')

        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise PaymentGatewayError('Payment gateway returned malformed JSON') from e

    @Logger.io
    async def initiate(self, *, booking: Booking, return_url: str) -> PaymentInitiation:
        body = await self._post(
            '/epayment/initiate/',
            {
                'return_url': return_url,
                'website_url': self.website_url,
                'amount': booking.total_price * MINOR_UNITS_PER_RUPEE,
                'purchase_order_id': str(booking.id),
                'purchase_order_name': f'Showtime {booking.showtime_id}: {", ".join(booking.seats)}',
            },
        )
        pidx = body.get('pidx')
        payment_url = body.get('payment_url')
        if not pidx or not payment_url:
            raise PaymentGatewayError('Payment gateway response is missing pidx or payment_url')

        return PaymentInitiation(
            provider_reference=pidx,
            redirect_url=payment_url,
            expires_at=self._parse_datetime(body.get('expires_at')),
        )

    @Logger.io
    async def lookup(self, *, provider_reference: str) -> PaymentLookup:
        body = await self._post('/epayment/lookup/', {'pidx': provider_reference})
        try:
            status = GatewayPaymentStatus(body.get('status'))
        except ValueError as e:
            raise PaymentGatewayError(f'Unknown payment status: {body.get("status")!r}') from e

        return PaymentLookup(
            provider_reference=body.get('pidx') or provider_reference,
            status=status,
            transaction_id=body.get('transaction_id'),
            total_amount=body.get('total_amount'),
        )

    @staticmethod
    def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
        if not value:
            return None
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            Logger.base.warning(f'💳 [KHALTI] Unparseable expires_at: {value!r}')
            return None
