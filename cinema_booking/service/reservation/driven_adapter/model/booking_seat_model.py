import uuid

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from cinema_booking.platform.database.orm_db_setting import Base


SEAT_CLAIM_CONSTRAINT = 'uq_booking_seat_showtime_seat'


class BookingSeatModel(Base):
    """
    Seat claim: one row per seat of a confirmed booking.

    Rows are written with the booking and deleted when it is cancelled, so the
    unique constraint only ever covers confirmed bookings. It is what makes two
    concurrent reservations of the same seat impossible, whatever the
    availability check saw.
    """

    __tablename__ = 'booking_seat'
    __table_args__ = (UniqueConstraint('showtime_id', 'seat_id', name=SEAT_CLAIM_CONSTRAINT),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('booking.id', ondelete='CASCADE'), nullable=False, index=True
    )
    showtime_id: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_id: Mapped[str] = mapped_column(String(8), nullable=False)
