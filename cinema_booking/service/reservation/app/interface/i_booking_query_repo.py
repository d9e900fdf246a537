from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from cinema_booking.service.reservation.domain.entity.booking_entity import Booking, BookingStatus


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_booked_seats(self, *, showtime_id: int) -> set[str]:
        """Union of seats across confirmed bookings for the showtime"""
        pass

    @abstractmethod
    async def list_by_user(
        self, *, user_id: int, status: Optional[BookingStatus] = None
    ) -> List[Booking]:
        """User's bookings, newest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Booking]:
        """All bookings, newest first"""
        pass
