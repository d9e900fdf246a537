"""init_cinema_schema

Revision ID: 0001
Revises:
Create Date: 2025-12-06

Schema:
- showtime: catalog-owned screenings (read-only for this service)
- booking: reservations with UUID7 primary key, status and payment state
- booking_seat: one claim per held seat; UNIQUE(showtime_id, seat_id) is what
  stops two confirmed bookings from holding the same seat
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'showtime',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('hall_id', sa.String(length=2), nullable=False),
        sa.Column('hall_name', sa.String(length=50), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.CheckConstraint('price >= 0', name='ck_showtime_price_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_showtime_movie_id'), 'showtime', ['movie_id'])

    op.create_table(
        'booking',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('seats', sa.JSON(), nullable=False),
        sa.Column('total_price', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('cancelled_by', sa.String(length=10), nullable=True),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_provider_reference', sa.String(length=64), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.CheckConstraint(
            "(status = 'confirmed' AND cancelled_by IS NULL)"
            " OR (status = 'cancelled' AND cancelled_by IS NOT NULL)",
            name='ck_booking_cancelled_by_matches_status',
        ),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtime.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_showtime_id'), 'booking', ['showtime_id'])
    op.create_index('ix_booking_showtime_status', 'booking', ['showtime_id', 'status'])

    op.create_table(
        'booking_seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('seat_id', sa.String(length=8), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['booking.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('showtime_id', 'seat_id', name='uq_booking_seat_showtime_seat'),
    )
    op.create_index(op.f('ix_booking_seat_booking_id'), 'booking_seat', ['booking_id'])


def downgrade() -> None:
    op.drop_index(op.f('ix_booking_seat_booking_id'), table_name='booking_seat')
    op.drop_table('booking_seat')
    op.drop_index('ix_booking_showtime_status', table_name='booking')
    op.drop_index(op.f('ix_booking_showtime_id'), table_name='booking')
    op.drop_index(op.f('ix_booking_user_id'), table_name='booking')
    op.drop_table('booking')
    op.drop_index(op.f('ix_showtime_movie_id'), table_name='showtime')
    op.drop_table('showtime')
