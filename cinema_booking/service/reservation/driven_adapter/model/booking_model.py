from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from cinema_booking.platform.database.orm_db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        CheckConstraint(
            "(status = 'confirmed' AND cancelled_by IS NULL)"
            " OR (status = 'cancelled' AND cancelled_by IS NOT NULL)",
            name='ck_booking_cancelled_by_matches_status',
        ),
        Index('ix_booking_showtime_status', 'showtime_id', 'status'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    showtime_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('showtime.id'), nullable=False, index=True
    )
    seats: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='confirmed', nullable=False)
    cancelled_by: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    payment_status: Mapped[str] = mapped_column(String(20), default='unpaid', nullable=False)
    payment_provider_reference: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
