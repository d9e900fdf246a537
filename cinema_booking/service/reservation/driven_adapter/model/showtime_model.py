from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cinema_booking.platform.database.orm_db_setting import Base


class ShowtimeModel(Base):
    """Catalog-owned table; this service only reads it"""

    __tablename__ = 'showtime'
    __table_args__ = (CheckConstraint('price >= 0', name='ck_showtime_price_non_negative'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    hall_id: Mapped[str] = mapped_column(String(2), nullable=False)
    hall_name: Mapped[str] = mapped_column(String(50), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
