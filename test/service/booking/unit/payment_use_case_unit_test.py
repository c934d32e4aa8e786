from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.app.command.process_payment_use_case import ProcessPaymentUseCase
from src.service.booking.app.command.update_payment_status_use_case import (
    UpdatePaymentStatusUseCase,
)
from src.service.booking.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.booking.domain.value_object.card_details import CardDetails
from test.service.booking.fake_unit_of_work import FakeUnitOfWork
from test.service.booking.fixtures import VALID_CARD, make_booking, make_event, make_user


pytestmark = pytest.mark.unit


@pytest.fixture
def user(store):
    return store.add_user(make_user())


@pytest.fixture
def booking(store, user):
    event = store.add_event(make_event())
    return store.add_booking(make_booking(event=event, user=user, number_of_tickets=2))


class TestProcessPayment:
    @pytest.fixture
    def use_case(self, uow, notification_service, metrics) -> ProcessPaymentUseCase:
        return ProcessPaymentUseCase(
            uow=uow, notification_service=notification_service, metrics=metrics
        )

    async def test_valid_card_marks_booking_paid(
        self, use_case, store, user, booking, notification_service, metrics
    ):
        detail = await use_case.process_payment(
            booking_id=str(booking.id), payment_details=VALID_CARD, user=user
        )

        assert detail.booking.payment_status == PaymentStatus.PAID
        assert detail.booking.payment_method == PaymentMethod.CARD
        assert store.booking(booking.id).payment_status == PaymentStatus.PAID
        notification_service.send_booking_confirmation.assert_awaited_once()
        metrics.record_payment.assert_called_once_with(result='paid')

    async def test_short_cvv_leaves_booking_unpaid(self, use_case, store, user, booking, metrics):
        card = CardDetails(
            card_number='4111111111111111', card_holder='Jane Doe', expiry_date='12/30', cvv='12'
        )

        with pytest.raises(ValidationError, match='CVV must be 3-4 digits'):
            await use_case.process_payment(
                booking_id=str(booking.id), payment_details=card, user=user
            )

        assert store.booking(booking.id).payment_status == PaymentStatus.PENDING
        metrics.record_payment.assert_called_once_with(result='rejected')

    async def test_paying_twice_is_rejected(self, use_case, user, booking):
        await use_case.process_payment(
            booking_id=str(booking.id), payment_details=VALID_CARD, user=user
        )
        with pytest.raises(ConflictError, match='Booking is already paid'):
            await use_case.process_payment(
                booking_id=str(booking.id), payment_details=VALID_CARD, user=user
            )

    async def test_cancelled_booking_cannot_be_paid(self, use_case, store, user, booking):
        store.booking(booking.id).status = BookingStatus.CANCELLED
        with pytest.raises(ConflictError, match='cancelled booking'):
            await use_case.process_payment(
                booking_id=str(booking.id), payment_details=VALID_CARD, user=user
            )

    @pytest.mark.parametrize('with_id,with_details', [(False, True), (True, False)])
    async def test_booking_id_and_details_required(
        self, use_case, user, booking, with_id, with_details
    ):
        with pytest.raises(ValidationError, match='Booking ID and payment details are required'):
            await use_case.process_payment(
                booking_id=str(booking.id) if with_id else None,
                payment_details=VALID_CARD if with_details else None,
                user=user,
            )

    async def test_only_the_owner_may_pay(self, use_case, booking):
        with pytest.raises(ForbiddenError, match='Not authorized to process payment for this booking'):
            await use_case.process_payment(
                booking_id=str(booking.id),
                payment_details=VALID_CARD,
                user=make_user(email='other@example.com'),
            )

    async def test_unknown_booking(self, use_case, user):
        with pytest.raises(NotFoundError, match='Booking not found'):
            await use_case.process_payment(
                booking_id='01936d8f-5e73-7c4e-a9c5-123456789abc',
                payment_details=VALID_CARD,
                user=user,
            )

    async def test_notification_failure_keeps_payment(
        self, use_case, store, user, booking, notification_service
    ):
        notification_service.send_booking_confirmation.side_effect = OSError('smtp down')

        await use_case.process_payment(
            booking_id=str(booking.id), payment_details=VALID_CARD, user=user
        )

        assert store.booking(booking.id).payment_status == PaymentStatus.PAID


class TestPaymentRacingOtherWrites:
    """A write committed between the payment's read and its update wins."""

    @pytest.fixture
    def booked_event(self, store, user):
        event = store.add_event(make_event(total_seats=10, available_seats=8, bookings=1))
        booking = store.add_booking(make_booking(event=event, user=user, number_of_tickets=2))
        return event, booking

    def _payment_with_write_after_read(self, store, notification_service, metrics, write):
        uow = FakeUnitOfWork(store)
        read_booking = uow.booking_command_repo.get_by_id
        pending = [write]

        async def read_then_write(*, booking_id):
            booking = await read_booking(booking_id=booking_id)
            while pending:
                await pending.pop()()
            return booking

        uow.booking_command_repo.get_by_id = read_then_write
        use_case = ProcessPaymentUseCase(
            uow=uow, notification_service=notification_service, metrics=metrics
        )
        return use_case, uow

    async def test_cancel_after_read_is_not_undone(
        self, store, user, booked_event, lock_registry, notification_service, metrics
    ):
        event, booking = booked_event
        cancel = CancelBookingUseCase(
            uow=FakeUnitOfWork(store), lock_registry=lock_registry, metrics=MagicMock()
        )

        async def cancel_booking():
            await cancel.cancel_booking(booking_id=str(booking.id), user=user)

        use_case, uow = self._payment_with_write_after_read(
            store, notification_service, metrics, cancel_booking
        )

        with pytest.raises(ConflictError, match='cancelled booking'):
            await use_case.process_payment(
                booking_id=str(booking.id), payment_details=VALID_CARD, user=user
            )

        stored = store.booking(booking.id)
        assert stored.status == BookingStatus.CANCELLED
        assert stored.payment_status == PaymentStatus.PENDING
        assert (store.event(event.id).available_seats, store.event(event.id).bookings) == (10, 0)
        assert uow.commits == 0
        notification_service.send_booking_confirmation.assert_not_awaited()

    async def test_second_payment_after_read_is_rejected(
        self, store, user, booked_event, notification_service, metrics
    ):
        _, booking = booked_event
        first = ProcessPaymentUseCase(
            uow=FakeUnitOfWork(store), notification_service=AsyncMock(), metrics=MagicMock()
        )

        async def pay_first():
            await first.process_payment(
                booking_id=str(booking.id), payment_details=VALID_CARD, user=user
            )

        use_case, _ = self._payment_with_write_after_read(
            store, notification_service, metrics, pay_first
        )

        with pytest.raises(ConflictError, match='Booking is already paid'):
            await use_case.process_payment(
                booking_id=str(booking.id), payment_details=VALID_CARD, user=user
            )

        assert store.booking(booking.id).payment_status == PaymentStatus.PAID
        metrics.record_payment.assert_called_once_with(result='rejected')


class TestUpdatePaymentStatus:
    @pytest.fixture
    def use_case(self, uow) -> UpdatePaymentStatusUseCase:
        return UpdatePaymentStatusUseCase(uow=uow)

    async def test_override_touches_only_payment_status(self, use_case, store, booking):
        event = store.event(booking.event_id)
        seats_before = (event.available_seats, event.bookings)

        detail = await use_case.update_payment_status(
            booking_id=str(booking.id), payment_status='refunded'
        )

        assert detail.booking.payment_status == PaymentStatus.REFUNDED
        assert store.booking(booking.id).status == BookingStatus.CONFIRMED
        assert (event.available_seats, event.bookings) == seats_before

    async def test_override_keeps_a_cancelled_booking_cancelled(self, use_case, store, booking):
        store.booking(booking.id).status = BookingStatus.CANCELLED

        await use_case.update_payment_status(booking_id=str(booking.id), payment_status='paid')

        stored = store.booking(booking.id)
        assert (stored.status, stored.payment_status) == (
            BookingStatus.CANCELLED,
            PaymentStatus.PAID,
        )

    async def test_status_required(self, use_case, booking):
        with pytest.raises(ValidationError, match='Payment status is required'):
            await use_case.update_payment_status(booking_id=str(booking.id), payment_status=None)

    async def test_unknown_status_lists_allowed_values(self, use_case, booking):
        with pytest.raises(
            ValidationError,
            match='Invalid payment status: settled. Must be one of: paid, pending, refunded',
        ):
            await use_case.update_payment_status(
                booking_id=str(booking.id), payment_status='settled'
            )

    async def test_unknown_booking(self, use_case):
        with pytest.raises(NotFoundError, match='Booking not found'):
            await use_case.update_payment_status(
                booking_id='01936d8f-5e73-7c4e-a9c5-123456789abc', payment_status='paid'
            )
