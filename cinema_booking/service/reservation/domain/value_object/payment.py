from datetime import datetime
from enum import StrEnum
from typing import Optional

import attrs


MINOR_UNITS_PER_RUPEE = 100  # gateway amounts are in paisa


class GatewayPaymentStatus(StrEnum):
    """Lookup statuses reported by the gateway (Khalti ePayment v2 vocabulary)"""

    COMPLETED = 'Completed'
    PENDING = 'Pending'
    INITIATED = 'Initiated'
    REFUNDED = 'Refunded'
    EXPIRED = 'Expired'
    USER_CANCELED = 'User canceled'


@attrs.frozen
class PaymentInitiation:
    provider_reference: str
    redirect_url: str
    expires_at: Optional[datetime] = None


@attrs.frozen
class PaymentLookup:
    provider_reference: str
    status: GatewayPaymentStatus
    transaction_id: Optional[str] = None
    total_amount: Optional[int] = None  # minor units

    @property
    def is_completed(self) -> bool:
        return self.status == GatewayPaymentStatus.COMPLETED

    def covers(self, total_price: int) -> bool:
        """Gateways that omit the amount are trusted on status alone"""
        if self.total_amount is None:
            return True
        return self.total_amount == total_price * MINOR_UNITS_PER_RUPEE
