"""
Booking Command Repository Implementation

Runs inside the unit of work's session; the caller commits.
Seat uniqueness is enforced by the booking_seat table's
(showtime_id, seat_id) unique constraint, and a violation is translated
into SeatConflictError here so raw storage errors never leave this layer.
"""

from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.metrics.booking_metrics import metrics
from cinema_booking.service.reservation.app.interface.i_booking_command_repo import (
    IBookingCommandRepo,
)
from cinema_booking.service.reservation.domain.booking_errors import (
    AlreadyPaidError,
    SeatConflictError,
)
from cinema_booking.service.reservation.domain.entity.booking_entity import (
    Booking,
    BookingStatus,
    PaymentStatus,
)
from cinema_booking.service.reservation.driven_adapter.model.booking_model import BookingModel
from cinema_booking.service.reservation.driven_adapter.model.booking_seat_model import (
    SEAT_CLAIM_CONSTRAINT,
    BookingSeatModel,
)
from cinema_booking.service.reservation.driven_adapter.repo.booking_mapper import (
    to_db_uuid,
    to_entity,
)


def _is_seat_claim_violation(error: IntegrityError) -> bool:
    # PostgreSQL names the constraint, SQLite names the columns
    message = str(error.orig)
    return SEAT_CLAIM_CONSTRAINT in message or 'booking_seat.seat_id' in message


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        booking_uuid = to_db_uuid(booking.id)
        self.session.add(
            BookingModel(
                id=booking_uuid,
                user_id=booking.user_id,
                showtime_id=booking.showtime_id,
                seats=list(booking.seats),
                total_price=booking.total_price,
                status=booking.status.value,
                cancelled_by=None,
                payment_status=booking.payment_status.value,
                created_at=booking.created_at,
                updated_at=booking.updated_at,
            )
        )
        try:
            await self.session.flush()
            self.session.add_all(
                BookingSeatModel(
                    booking_id=booking_uuid, showtime_id=booking.showtime_id, seat_id=seat
                )
                for seat in booking.seats
            )
            await self.session.flush()
        except IntegrityError as e:
            if not _is_seat_claim_violation(e):
                raise
            await self.session.rollback()
            metrics.record_commit_conflict()
            claimed = await self._get_claimed_seats(
                showtime_id=booking.showtime_id, seats=booking.seats
            )
            Logger.base.warning(
                f'⚔️ [RESERVE] Seat claim collision on showtime {booking.showtime_id}: {claimed}'
            )
            raise SeatConflictError(claimed or booking.seats) from e

        return booking

    async def _get_claimed_seats(self, *, showtime_id: int, seats: list[str]) -> list[str]:
        result = await self.session.execute(
            select(BookingSeatModel.seat_id).where(
                BookingSeatModel.showtime_id == showtime_id,
                BookingSeatModel.seat_id.in_(seats),
            )
        )
        claimed = set(result.scalars().all())
        return [seat for seat in seats if seat in claimed]

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.id == to_db_uuid(booking_id))
            .with_for_update()
            .execution_options(populate_existing=True)  # re-read rows already in the session
        )
        db_booking = result.scalar_one_or_none()
        return to_entity(db_booking) if db_booking else None

    @Logger.io
    async def cancel(
        self, *, booking: Booking, expected_user_id: Optional[int] = None
    ) -> Optional[Booking]:
        booking_uuid = to_db_uuid(booking.id)
        stmt = update(BookingModel).where(
            BookingModel.id == booking_uuid,
            BookingModel.status == BookingStatus.CONFIRMED.value,
        )
        if expected_user_id is not None:
            stmt = stmt.where(BookingModel.user_id == expected_user_id)

        result = await self.session.execute(
            stmt.values(
                status=booking.status.value,
                cancelled_by=booking.cancelled_by.value if booking.cancelled_by else None,
                updated_at=booking.updated_at,
            ).execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:  # type: ignore[attr-defined]
            return None

        # Release the seats in the same transaction as the status change
        await self.session.execute(
            delete(BookingSeatModel).where(BookingSeatModel.booking_id == booking_uuid)
        )
        return booking

    @Logger.io
    async def update_payment(self, *, booking: Booking) -> Booking:
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == to_db_uuid(booking.id),
                BookingModel.payment_status != PaymentStatus.PAID.value,  # paid never regresses
            )
            .values(
                payment_status=booking.payment_status.value,
                payment_provider_reference=booking.payment_provider_reference,
                paid_at=booking.paid_at,
                updated_at=booking.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:  # type: ignore[attr-defined]
            if await self.get_by_id(booking_id=booking.id) is None:
                raise NotFoundError('Booking not found')
            raise AlreadyPaidError()
        return booking

    @Logger.io
    async def delete_cancelled(self, *, booking_id: UUID) -> bool:
        booking_uuid = to_db_uuid(booking_id)
        result = await self.session.execute(
            delete(BookingModel)
            .where(
                BookingModel.id == booking_uuid,
                BookingModel.status == BookingStatus.CANCELLED.value,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:  # type: ignore[attr-defined]
            return False

        # Claims are released at cancellation; clear any stragglers where FKs don't cascade
        await self.session.execute(
            delete(BookingSeatModel).where(BookingSeatModel.booking_id == booking_uuid)
        )
        return True
