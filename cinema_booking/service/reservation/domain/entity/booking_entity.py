from datetime import datetime, timezone
from enum import StrEnum
from typing import List, Optional

import attrs
from uuid_utils import UUID

from cinema_booking.platform.exception.exceptions import DomainError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.domain.booking_errors import (
    AlreadyCancelledError,
    AlreadyPaidError,
    InvalidRequestError,
    NotCancelledError,
    PaymentNotPendingError,
    ReferenceMismatchError,
)


class BookingStatus(StrEnum):
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


class CancelledBy(StrEnum):
    USER = 'user'
    ADMIN = 'admin'


class PaymentStatus(StrEnum):
    UNPAID = 'unpaid'
    PENDING = 'pending'
    PAID = 'paid'


@attrs.define
class Booking:
    """
    A confirmed booking holds its seats for the showtime until it is cancelled.

    Status: confirmed -> cancelled (terminal; may then be removed).
    Payment: unpaid -> pending -> paid, and pending -> unpaid on failed verification.
    """

    id: UUID
    user_id: Optional[int]
    showtime_id: int
    seats: List[str]
    total_price: int
    status: BookingStatus = BookingStatus.CONFIRMED
    cancelled_by: Optional[CancelledBy] = None
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_provider_reference: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        user_id: Optional[int],
        showtime_id: int,
        seats: List[str],
        seat_price: int,
    ) -> 'Booking':
        if not seats:
            raise InvalidRequestError()
        if len(set(seats)) != len(seats):
            raise DomainError('Duplicate seats in booking')
        if seat_price < 0:
            raise DomainError('Seat price must not be negative')

        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            user_id=user_id,
            showtime_id=showtime_id,
            seats=list(seats),
            total_price=len(seats) * seat_price,  # frozen: later price changes don't apply
            status=BookingStatus.CONFIRMED,
            payment_status=PaymentStatus.UNPAID,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        return self.user_id is not None and self.user_id == user_id

    @Logger.io
    def cancel(self, *, by: CancelledBy) -> 'Booking':
        if self.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError()

        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=BookingStatus.CANCELLED, cancelled_by=by, updated_at=now)

    @Logger.io
    def validate_can_be_removed(self) -> None:
        """Confirmed bookings are never deleted directly, only cancelled then removed"""
        if self.status != BookingStatus.CANCELLED:
            raise NotCancelledError()

    @Logger.io
    def start_payment(self, *, provider_reference: str) -> 'Booking':
        """
        Record an initiated payment.

        Raises:
            AlreadyPaidError: payment already verified
            AlreadyCancelledError: cancelled bookings cannot be paid
        """
        self.validate_can_start_payment()
        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            payment_status=PaymentStatus.PENDING,
            payment_provider_reference=provider_reference,
            updated_at=now,
        )

    def validate_can_start_payment(self) -> None:
        if self.payment_status == PaymentStatus.PAID:
            raise AlreadyPaidError()
        if self.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError('Cannot pay for a cancelled booking')

    def validate_provider_reference(self, provider_reference: str) -> None:
        if (
            not self.payment_provider_reference
            or self.payment_provider_reference != provider_reference
        ):
            raise ReferenceMismatchError()

    def is_pending_with(self, provider_reference: str) -> bool:
        return (
            self.payment_status == PaymentStatus.PENDING
            and self.payment_provider_reference == provider_reference
        )

    def validate_payment_is_pending(self) -> None:
        if self.payment_status == PaymentStatus.PAID:
            raise AlreadyPaidError()
        if self.payment_status != PaymentStatus.PENDING:
            raise PaymentNotPendingError()

    @Logger.io
    def mark_as_paid(self) -> 'Booking':
        """pending -> paid; an unpaid booking must be initiated again first"""
        self.validate_payment_is_pending()
        now = datetime.now(timezone.utc)
        return attrs.evolve(self, payment_status=PaymentStatus.PAID, paid_at=now, updated_at=now)

    @Logger.io
    def mark_payment_as_failed(self) -> 'Booking':
        """pending -> unpaid; the seats stay held"""
        if self.payment_status == PaymentStatus.PAID:
            raise AlreadyPaidError()
        now = datetime.now(timezone.utc)
        return attrs.evolve(self, payment_status=PaymentStatus.UNPAID, updated_at=now)
