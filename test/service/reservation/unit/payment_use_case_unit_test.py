"""
Unit tests for InitiatePaymentUseCase and VerifyPaymentUseCase

Test Coverage:
1. Initiate: owner check, paid/cancelled refusal, pending on success,
   gateway failure leaves the booking untouched
2. Verify: reference mismatch (paid bookings too), Completed -> paid,
   other status or amount -> unpaid, gateway failure commits unpaid,
   unpaid bookings are refused before the lookup, transitions apply to
   the locked re-read
"""

from unittest.mock import AsyncMock

import pytest
import uuid_utils

from cinema_booking.platform.exception.exceptions import ForbiddenError, NotFoundError
from cinema_booking.service.reservation.app.command.initiate_payment_use_case import (
    InitiatePaymentUseCase,
)
from cinema_booking.service.reservation.app.command.verify_payment_use_case import (
    VerifyPaymentUseCase,
)
from cinema_booking.service.reservation.domain.booking_errors import (
    AlreadyCancelledError,
    AlreadyPaidError,
    PaymentGatewayError,
    PaymentNotPendingError,
    ReferenceMismatchError,
)
from cinema_booking.service.reservation.domain.entity.booking_entity import (
    Booking,
    CancelledBy,
    PaymentStatus,
)
from cinema_booking.service.reservation.domain.entity.user_entity import (
    AuthenticatedUser,
    UserRole,
)
from cinema_booking.service.reservation.domain.value_object.payment import (
    GatewayPaymentStatus,
    PaymentInitiation,
    PaymentLookup,
)


pytestmark = pytest.mark.unit

OWNER = AuthenticatedUser(id=1, role=UserRole.USER)
STRANGER = AuthenticatedUser(id=2, role=UserRole.USER)
ADMIN = AuthenticatedUser(id=99, role=UserRole.ADMIN)
PIDX = 'pidx-123'


def _booking() -> Booking:
    return Booking.create(
        id=uuid_utils.uuid7(), user_id=OWNER.id, showtime_id=1, seats=['A1', 'A2'], seat_price=300
    )


def _paid(booking: Booking) -> Booking:
    return booking.start_payment(provider_reference=PIDX).mark_as_paid()


class TestInitiatePayment:
    def setup_method(self):
        self.booking = _booking()
        self.uow = AsyncMock()
        self.uow.booking_query_repo.get_by_id.return_value = self.booking
        self.uow.booking_command_repo.get_by_id.return_value = self.booking
        self.uow.booking_command_repo.update_payment.side_effect = lambda *, booking: booking

        self.gateway = AsyncMock()
        self.gateway.initiate.return_value = PaymentInitiation(
            provider_reference=PIDX, redirect_url='https://pay.example/checkout?pidx=pidx-123'
        )
        self.use_case = InitiatePaymentUseCase(uow=self.uow, payment_gateway=self.gateway)

    @pytest.mark.asyncio
    async def test_owner_starts_payment(self):
        initiation = await self.use_case.execute(booking_id=self.booking.id, actor=OWNER)

        # Then: The gateway reference is stored and the booking becomes pending
        assert initiation.provider_reference == PIDX
        saved = self.uow.booking_command_repo.update_payment.await_args.kwargs['booking']
        assert saved.payment_status == PaymentStatus.PENDING
        assert saved.payment_provider_reference == PIDX
        assert saved.seats == ['A1', 'A2']
        self.uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_admin_may_start_payment(self):
        await self.use_case.execute(booking_id=self.booking.id, actor=ADMIN)

        self.gateway.initiate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stranger_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            await self.use_case.execute(booking_id=self.booking.id, actor=STRANGER)
        self.gateway.initiate.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_booking(self):
        self.uow.booking_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.use_case.execute(booking_id=uuid_utils.uuid7(), actor=OWNER)

    @pytest.mark.asyncio
    async def test_paid_booking_is_refused(self):
        self.uow.booking_query_repo.get_by_id.return_value = _paid(self.booking)

        with pytest.raises(AlreadyPaidError):
            await self.use_case.execute(booking_id=self.booking.id, actor=OWNER)
        self.gateway.initiate.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancelled_booking_is_refused(self):
        self.uow.booking_query_repo.get_by_id.return_value = self.booking.cancel(
            by=CancelledBy.USER
        )

        with pytest.raises(AlreadyCancelledError):
            await self.use_case.execute(booking_id=self.booking.id, actor=OWNER)
        self.gateway.initiate.assert_not_called()

    @pytest.mark.asyncio
    async def test_gateway_failure_leaves_booking_untouched(self):
        self.gateway.initiate.side_effect = PaymentGatewayError('Payment gateway timed out')

        with pytest.raises(PaymentGatewayError):
            await self.use_case.execute(booking_id=self.booking.id, actor=OWNER)

        self.uow.booking_command_repo.update_payment.assert_not_called()
        self.uow.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_paid_between_read_and_lock_is_refused(self):
        # Given: Another request settled the payment while the gateway was called
        self.uow.booking_command_repo.get_by_id.return_value = _paid(self.booking)

        with pytest.raises(AlreadyPaidError):
            await self.use_case.execute(booking_id=self.booking.id, actor=OWNER)
        self.uow.commit.assert_not_called()


class TestVerifyPayment:
    def setup_method(self):
        self.booking = _booking().start_payment(provider_reference=PIDX)
        self.uow = AsyncMock()
        self.uow.booking_query_repo.get_by_id.return_value = self.booking
        self.uow.booking_command_repo.get_by_id.return_value = self.booking
        self.uow.booking_command_repo.update_payment.side_effect = lambda *, booking: booking

        self.gateway = AsyncMock()
        self.use_case = VerifyPaymentUseCase(uow=self.uow, payment_gateway=self.gateway)

    def _lookup_returns(self, status: GatewayPaymentStatus, total_amount=None) -> None:
        self.gateway.lookup.return_value = PaymentLookup(
            provider_reference=PIDX, status=status, total_amount=total_amount
        )

    async def _verify(self, provider_reference: str = PIDX, actor=OWNER) -> Booking:
        return await self.use_case.execute(
            booking_id=self.booking.id, provider_reference=provider_reference, actor=actor
        )

    @pytest.mark.asyncio
    async def test_completed_lookup_marks_paid(self):
        self._lookup_returns(GatewayPaymentStatus.COMPLETED)

        updated = await self._verify()

        assert updated.payment_status == PaymentStatus.PAID
        assert updated.paid_at is not None
        self.uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_completed_lookup_with_matching_amount_marks_paid(self):
        # Given: 2 seats at 300 rupees, reported in paisa
        self._lookup_returns(GatewayPaymentStatus.COMPLETED, total_amount=60000)

        updated = await self._verify()

        assert updated.payment_status == PaymentStatus.PAID

    @pytest.mark.asyncio
    async def test_completed_lookup_with_wrong_amount_reverts_to_unpaid(self):
        self._lookup_returns(GatewayPaymentStatus.COMPLETED, total_amount=100)

        updated = await self._verify()

        assert updated.payment_status == PaymentStatus.UNPAID
        assert updated.paid_at is None
        self.uow.commit.assert_awaited_once()

    @pytest.mark.parametrize(
        'status',
        [
            GatewayPaymentStatus.PENDING,
            GatewayPaymentStatus.EXPIRED,
            GatewayPaymentStatus.USER_CANCELED,
        ],
    )
    @pytest.mark.asyncio
    async def test_other_lookup_status_reverts_to_unpaid(self, status):
        self._lookup_returns(status)

        updated = await self._verify()

        assert updated.payment_status == PaymentStatus.UNPAID
        assert updated.paid_at is None
        assert updated.seats == ['A1', 'A2']

    @pytest.mark.asyncio
    async def test_reference_mismatch_changes_nothing(self):
        with pytest.raises(ReferenceMismatchError):
            await self._verify(provider_reference='someone-else')

        self.gateway.lookup.assert_not_called()
        self.uow.booking_command_repo.update_payment.assert_not_called()

    @pytest.mark.asyncio
    async def test_gateway_failure_commits_unpaid_then_raises(self):
        self.gateway.lookup.side_effect = PaymentGatewayError('Payment gateway timed out')

        with pytest.raises(PaymentGatewayError):
            await self._verify()

        saved = self.uow.booking_command_repo.update_payment.await_args.kwargs['booking']
        assert saved.payment_status == PaymentStatus.UNPAID
        self.uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_gateway_failure_leaves_a_newer_initiation_pending(self):
        # Given: The payment was re-initiated while the lookup was in flight
        self.gateway.lookup.side_effect = PaymentGatewayError('Payment gateway timed out')
        self.uow.booking_command_repo.get_by_id.return_value = self.booking.start_payment(
            provider_reference='pidx-456'
        )

        with pytest.raises(PaymentGatewayError):
            await self._verify()

        self.uow.booking_command_repo.update_payment.assert_not_called()
        self.uow.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_already_paid_is_returned_unchanged(self):
        paid = self.booking.mark_as_paid()
        self.uow.booking_query_repo.get_by_id.return_value = paid

        result = await self._verify()

        assert result is paid
        self.gateway.lookup.assert_not_called()
        self.uow.booking_command_repo.update_payment.assert_not_called()

    @pytest.mark.asyncio
    async def test_paid_booking_still_rejects_a_wrong_reference(self):
        self.uow.booking_query_repo.get_by_id.return_value = self.booking.mark_as_paid()

        with pytest.raises(ReferenceMismatchError):
            await self._verify(provider_reference='bogus')

        self.gateway.lookup.assert_not_called()

    @pytest.mark.asyncio
    async def test_unpaid_booking_is_refused_before_lookup(self):
        # Given: An earlier verification failed and nothing was initiated since
        failed = self.booking.mark_payment_as_failed()
        self.uow.booking_query_repo.get_by_id.return_value = failed
        self.uow.booking_command_repo.get_by_id.return_value = failed
        self._lookup_returns(GatewayPaymentStatus.COMPLETED)

        with pytest.raises(PaymentNotPendingError):
            await self._verify()

        self.gateway.lookup.assert_not_called()
        self.uow.booking_command_repo.update_payment.assert_not_called()

    @pytest.mark.asyncio
    async def test_transition_is_applied_to_the_locked_row(self):
        self._lookup_returns(GatewayPaymentStatus.COMPLETED)

        await self._verify()

        self.uow.booking_command_repo.get_by_id.assert_awaited_once_with(
            booking_id=self.booking.id
        )

    @pytest.mark.asyncio
    async def test_reinitiated_while_looking_up_is_a_mismatch(self):
        # Given: The locked row now carries a newer gateway reference
        self._lookup_returns(GatewayPaymentStatus.COMPLETED)
        self.uow.booking_command_repo.get_by_id.return_value = self.booking.start_payment(
            provider_reference='pidx-456'
        )

        with pytest.raises(ReferenceMismatchError):
            await self._verify()

        self.uow.booking_command_repo.update_payment.assert_not_called()
        self.uow.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_paid_while_looking_up_is_returned_unchanged(self):
        self._lookup_returns(GatewayPaymentStatus.EXPIRED)
        paid = self.booking.mark_as_paid()
        self.uow.booking_command_repo.get_by_id.return_value = paid

        result = await self._verify()

        assert result is paid
        self.uow.booking_command_repo.update_payment.assert_not_called()

    @pytest.mark.asyncio
    async def test_stranger_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            await self._verify(actor=STRANGER)
