from typing import List

from fastapi import APIRouter, Depends

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.types import UtilsUUID7
from cinema_booking.service.reservation.app.command.cancel_booking_by_admin_use_case import (
    CancelBookingByAdminUseCase,
)
from cinema_booking.service.reservation.app.command.remove_cancelled_booking_use_case import (
    RemoveCancelledBookingUseCase,
)
from cinema_booking.service.reservation.app.query.list_bookings_use_case import (
    ListBookingsUseCase,
)
from cinema_booking.service.reservation.domain.entity.user_entity import AuthenticatedUser
from cinema_booking.service.reservation.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)
from cinema_booking.service.reservation.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
    CancelBookingResponse,
    RemoveBookingResponse,
)


router = APIRouter()


@router.get('')
@Logger.io
async def list_all_bookings(
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_all_bookings(actor=current_user)
    return [BookingResponse.from_entity(booking) for booking in bookings]


@router.delete('/{booking_id}')
@Logger.io
async def cancel_booking_as_admin(
    booking_id: UtilsUUID7,
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: CancelBookingByAdminUseCase = Depends(CancelBookingByAdminUseCase.depends),
) -> CancelBookingResponse:
    booking = await use_case.execute(booking_id=booking_id, actor=current_user)
    return CancelBookingResponse(
        message='Booking cancelled by admin', booking=BookingResponse.from_entity(booking)
    )


@router.delete('/{booking_id}/remove')
@Logger.io
async def remove_cancelled_booking(
    booking_id: UtilsUUID7,
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: RemoveCancelledBookingUseCase = Depends(RemoveCancelledBookingUseCase.depends),
) -> RemoveBookingResponse:
    await use_case.execute(booking_id=booking_id, actor=current_user)
    return RemoveBookingResponse(message='Booking removed', booking_id=booking_id)
