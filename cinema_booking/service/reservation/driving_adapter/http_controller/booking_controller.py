from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.types import UtilsUUID7
from cinema_booking.service.reservation.app.command.cancel_booking_by_user_use_case import (
    CancelBookingByUserUseCase,
)
from cinema_booking.service.reservation.app.command.initiate_payment_use_case import (
    InitiatePaymentUseCase,
)
from cinema_booking.service.reservation.app.command.reserve_seats_use_case import (
    ReserveSeatsUseCase,
)
from cinema_booking.service.reservation.app.command.verify_payment_use_case import (
    VerifyPaymentUseCase,
)
from cinema_booking.service.reservation.app.query.get_booking_use_case import GetBookingUseCase
from cinema_booking.service.reservation.app.query.list_bookings_use_case import (
    ListBookingsUseCase,
)
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser
from cinema_booking.service.reservation.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from cinema_booking.service.reservation.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
    CancelBookingResponse,
    InitiatePaymentResponse,
    VerifyPaymentRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: ReserveSeatsUseCase = Depends(ReserveSeatsUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('showtime_id', request.showtime_id or 0)
        span.set_attribute('user_id', current_user.id)

        booking = await use_case.execute(
            showtime_id=request.showtime_id,
            user_id=current_user.id,
            seats=request.seats,
        )
        return BookingResponse.from_entity(booking)


@router.get('/user/history')
@Logger.io
async def list_my_bookings(
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_user_bookings(user_id=current_user.id)
    return [BookingResponse.from_entity(booking) for booking in bookings]


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UtilsUUID7,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id, actor=current_user)
    return BookingResponse.from_entity(booking)


@router.delete('/{booking_id}')
@Logger.io
async def cancel_booking(
    booking_id: UtilsUUID7,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: CancelBookingByUserUseCase = Depends(CancelBookingByUserUseCase.depends),
) -> CancelBookingResponse:
    booking = await use_case.execute(booking_id=booking_id, actor=current_user)
    return CancelBookingResponse(
        message='Booking cancelled successfully', booking=BookingResponse.from_entity(booking)
    )


@router.post('/{booking_id}/payment/khalti/initiate')
@Logger.io
async def initiate_payment(
    booking_id: UtilsUUID7,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: InitiatePaymentUseCase = Depends(InitiatePaymentUseCase.depends),
) -> InitiatePaymentResponse:
    initiation = await use_case.execute(booking_id=booking_id, actor=current_user)
    return InitiatePaymentResponse(
        booking_id=booking_id,
        pidx=initiation.provider_reference,
        payment_url=initiation.redirect_url,
        expires_at=initiation.expires_at,
    )


@router.post('/{booking_id}/payment/khalti/verify')
@Logger.io
async def verify_payment(
    booking_id: UtilsUUID7,
    request: VerifyPaymentRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: VerifyPaymentUseCase = Depends(VerifyPaymentUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        booking_id=booking_id, provider_reference=request.pidx, actor=current_user
    )
    return BookingResponse.from_entity(booking)
