from datetime import timedelta

import pytest

from src.platform.exception.exceptions import ForbiddenError, NotFoundError, ValidationError
from src.platform.types.datetime_utils import utc_now
from src.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.booking.domain.enum.booking_status import BookingStatus
from test.service.booking.fixtures import make_booking, make_event, make_user


pytestmark = pytest.mark.unit


@pytest.fixture
def alice(store):
    return store.add_user(make_user(name='Alice', email='alice@example.com'))


@pytest.fixture
def bob(store):
    return store.add_user(make_user(name='Bob', email='bob@example.com'))


@pytest.fixture
def event(store):
    return store.add_event(make_event())


class TestGetBooking:
    async def test_owner_sees_booking_with_summaries(self, uow, store, alice, event):
        booking = store.add_booking(make_booking(event=event, user=alice))

        detail = await GetBookingUseCase(uow=uow).get_booking(
            booking_id=str(booking.id), user=alice
        )

        assert detail.booking.id == booking.id
        assert detail.event.title == event.title
        assert detail.user.email == 'alice@example.com'

    async def test_other_user_is_forbidden(self, uow, store, alice, bob, event):
        booking = store.add_booking(make_booking(event=event, user=alice))
        with pytest.raises(ForbiddenError, match='Not authorized to view this booking'):
            await GetBookingUseCase(uow=uow).get_booking(booking_id=str(booking.id), user=bob)

    async def test_missing_and_malformed(self, uow, alice):
        use_case = GetBookingUseCase(uow=uow)
        with pytest.raises(NotFoundError):
            await use_case.get_booking(booking_id='01936d8f-5e73-7c4e-a9c5-123456789abc', user=alice)
        with pytest.raises(ValidationError, match='Invalid booking ID format'):
            await use_case.get_booking(booking_id='not-a-uuid', user=alice)


class TestListBookings:
    async def test_user_bookings_newest_first_without_phone(self, uow, store, alice, bob, event):
        now = utc_now()
        older = store.add_booking(
            make_booking(event=event, user=alice, booking_date=now - timedelta(hours=2))
        )
        newer = store.add_booking(
            make_booking(
                event=event,
                user=alice,
                booking_date=now - timedelta(hours=1),
                status=BookingStatus.CANCELLED,
            )
        )
        store.add_booking(make_booking(event=event, user=bob))

        details = await ListBookingsUseCase(uow=uow).list_user_bookings(user=alice)

        assert [d.booking.id for d in details] == [newer.id, older.id]
        assert all(d.user.phone == '' for d in details)

    async def test_all_bookings(self, uow, store, alice, bob, event):
        store.add_booking(make_booking(event=event, user=alice))
        store.add_booking(make_booking(event=event, user=bob))

        details = await ListBookingsUseCase(uow=uow).list_all_bookings()

        assert {d.user.name for d in details} == {'Alice', 'Bob'}

    async def test_event_attendees_are_confirmed_only(self, uow, store, alice, bob, event):
        confirmed = store.add_booking(make_booking(event=event, user=alice))
        store.add_booking(make_booking(event=event, user=bob, status=BookingStatus.CANCELLED))
        store.add_booking(make_booking(event=store.add_event(make_event()), user=bob))

        details = await ListBookingsUseCase(uow=uow).list_event_bookings(event_id=str(event.id))

        assert [d.booking.id for d in details] == [confirmed.id]
        assert details[0].user.phone == '555-0100'

    async def test_event_id_must_be_a_uuid(self, uow):
        with pytest.raises(ValidationError, match='Invalid event ID format'):
            await ListBookingsUseCase(uow=uow).list_event_bookings(event_id='abc')
