from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from cinema_booking.platform.types import UtilsUUID7
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking


class BookingCreateRequest(BaseModel):
    # Optional so a missing field is reported as InvalidRequestError, not a schema error
    showtime_id: Optional[int] = None
    seats: Optional[List[str]] = None

    model_config = {
        'json_schema_extra': {'example': {'showtime_id': 1, 'seats': ['A1', 'A2']}},
    }


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 2,
                'showtime_id': 1,
                'seats': ['A1', 'A2'],
                'total_price': 600,
                'status': 'confirmed',
                'cancelled_by': None,
                'payment_status': 'unpaid',
                'paid_at': None,
                'created_at': '2025-01-10T10:30:00',
            }
        },
    }

    id: UtilsUUID7  # UUID7
    user_id: Optional[int]
    showtime_id: int
    seats: List[str]
    total_price: int
    status: str
    cancelled_by: Optional[str] = None
    payment_status: str
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            showtime_id=booking.showtime_id,
            seats=booking.seats,
            total_price=booking.total_price,
            status=booking.status.value,
            cancelled_by=booking.cancelled_by.value if booking.cancelled_by else None,
            payment_status=booking.payment_status.value,
            paid_at=booking.paid_at,
            created_at=booking.created_at,
        )


class CancelBookingResponse(BaseModel):
    message: str
    booking: BookingResponse


class RemoveBookingResponse(BaseModel):
    message: str
    booking_id: UtilsUUID7


class InitiatePaymentResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'booking_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'pidx': 'bZQLD9wRVWo4CdESSfuSsB',
                'payment_url': 'https://test-pay.khalti.com/?pidx=bZQLD9wRVWo4CdESSfuSsB',
                'expires_at': '2025-01-10T11:00:00+05:45',
            }
        },
    }

    booking_id: UtilsUUID7
    pidx: str
    payment_url: str
    expires_at: Optional[datetime] = None


class VerifyPaymentRequest(BaseModel):
    pidx: str

    model_config = {'json_schema_extra': {'example': {'pidx': 'bZQLD9wRVWo4CdESSfuSsB'}}}
