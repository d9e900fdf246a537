from abc import ABC, abstractmethod

from cinema_booking.service.reservation.domain.entity.booking_entity import Booking
from cinema_booking.service.reservation.domain.value_object.payment import (
    PaymentInitiation,
    PaymentLookup,
)


class IPaymentGateway(ABC):
    """
    Third-party payment gateway boundary

    Implementations must bound every call in time and raise PaymentGatewayError
    for timeouts, transport failures and unexpected responses.
    """

    @abstractmethod
    async def initiate(self, *, booking: Booking, return_url: str) -> PaymentInitiation:
        """
        Start a payment for the booking's total price

        Args:
            booking: Confirmed, unpaid booking
            return_url: Where the gateway sends the customer back after paying

        Returns:
            Provider reference (pidx) and the URL to redirect the customer to
        """
        pass

    @abstractmethod
    async def lookup(self, *, provider_reference: str) -> PaymentLookup:
        """Ask the gateway for the current status of a payment"""
        pass
