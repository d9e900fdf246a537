from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from cinema_booking.service.reservation.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    """Booking writes; every method runs inside the caller's unit of work"""

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert a confirmed booking together with its seat claims

        Args:
            booking: New booking (status confirmed)

        Returns:
            Persisted booking

        Raises:
            SeatConflictError: another confirmed booking already claims one of the seats
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def cancel(
        self, *, booking: Booking, expected_user_id: Optional[int] = None
    ) -> Optional[Booking]:
        """
        Persist a cancellation and release the booking's seat claims

        The update only applies while the stored booking is still confirmed
        (and owned by expected_user_id when given).

        Args:
            booking: Booking already transitioned to cancelled
            expected_user_id: Owner guard for user-initiated cancellation

        Returns:
            The cancelled booking, or None when no confirmed booking matched
        """
        pass

    @abstractmethod
    async def update_payment(self, *, booking: Booking) -> Booking:
        """Persist payment_status, payment_provider_reference and paid_at"""
        pass

    @abstractmethod
    async def delete_cancelled(self, *, booking_id: UUID) -> bool:
        """
        Delete a booking only if it is cancelled

        Returns:
            True when a row was deleted
        """
        pass
