import uuid

from uuid_utils import UUID

from cinema_booking.service.reservation.domain.entity.booking_entity import (
    Booking,
    BookingStatus,
    CancelledBy,
    PaymentStatus,
)
from cinema_booking.service.reservation.driven_adapter.model.booking_model import BookingModel


def to_db_uuid(value: UUID | uuid.UUID | str) -> uuid.UUID:
    """SQLAlchemy's Uuid type binds stdlib uuid.UUID only"""
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=UUID(str(db_booking.id)),  # Convert stdlib uuid.UUID to uuid_utils.UUID
        user_id=db_booking.user_id,
        showtime_id=db_booking.showtime_id,
        seats=list(db_booking.seats or []),
        total_price=db_booking.total_price,
        status=BookingStatus(db_booking.status),
        cancelled_by=CancelledBy(db_booking.cancelled_by) if db_booking.cancelled_by else None,
        payment_status=PaymentStatus(db_booking.payment_status),
        payment_provider_reference=db_booking.payment_provider_reference,
        paid_at=db_booking.paid_at,
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )
