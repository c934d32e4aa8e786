import pytest

from src.platform.exception.exceptions import ConflictError, ValidationError
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.seat_occupancy_domain import (
    build_booked_seat_ledger,
    confirmed_booking_count,
    confirmed_ticket_count,
    ensure_seats_claimable,
    occupied_seat_ids,
    validate_seat_selection,
)
from src.service.booking.domain.value_object.seat import SeatLayout, SelectedSeat, row_label
from test.service.booking.fixtures import ledger, make_booking, make_event, make_user, seats


pytestmark = pytest.mark.unit


@pytest.fixture
def bookings():
    event, user = make_event(), make_user()
    return [
        make_booking(event=event, user=user, number_of_tickets=2, selected_seats=seats('A1', 'A2')),
        make_booking(
            event=event,
            user=user,
            number_of_tickets=1,
            selected_seats=seats('B5'),
            status=BookingStatus.CANCELLED,
        ),
        make_booking(event=event, user=user, number_of_tickets=3),
    ]


class TestRowLabels:
    @pytest.mark.parametrize(
        'index,label', [(0, 'A'), (9, 'J'), (25, 'Z'), (26, 'AA'), (27, 'AB'), (701, 'ZZ')]
    )
    def test_spreadsheet_style(self, index, label):
        assert row_label(index) == label


class TestLedger:
    def test_only_confirmed_seats_count(self, bookings):
        assert build_booked_seat_ledger(bookings) == ledger('A1', 'A2')
        assert occupied_seat_ids(bookings) == {'A-1', 'A-2'}

    def test_counters(self, bookings):
        assert confirmed_ticket_count(bookings) == 5
        assert confirmed_booking_count(bookings) == 2

    def test_seat_id_is_case_sensitive(self):
        assert SelectedSeat(row='a', seat_number=1).seat_id != SelectedSeat(
            row='A', seat_number=1
        ).seat_id


class TestSelectionShape:
    def test_count_must_match_tickets(self):
        with pytest.raises(
            ValidationError,
            match=r'Number of selected seats \(1\) must match number of tickets \(2\)',
        ):
            validate_seat_selection(requested=seats('A1'), number_of_tickets=2)

    def test_empty_selection_is_general_admission(self):
        validate_seat_selection(requested=[], number_of_tickets=4)

    def test_duplicate_seat_in_one_request(self):
        with pytest.raises(ValidationError, match='Seat A1 is selected more than once'):
            validate_seat_selection(requested=seats('A1', 'A1'), number_of_tickets=2)


class TestClaimable:
    def test_first_taken_seat_is_named(self):
        with pytest.raises(ConflictError, match='Seat A2 is already booked'):
            ensure_seats_claimable(
                requested=seats('C3', 'A2', 'A1'),
                layout=SeatLayout.default(),
                occupied={'A-1', 'A-2'},
            )

    def test_free_seats_pass(self):
        ensure_seats_claimable(
            requested=seats('C3', 'J12'), layout=SeatLayout.default(), occupied={'A-1'}
        )

    def test_row_outside_layout(self):
        with pytest.raises(ValidationError, match='Invalid seat K1: row must be between A and J'):
            ensure_seats_claimable(requested=seats('K1'), layout=SeatLayout.default(), occupied=set())

    @pytest.mark.parametrize('label', ['A0', 'A13'])
    def test_seat_number_outside_layout(self, label):
        with pytest.raises(ValidationError, match='seat number must be between 1 and 12'):
            ensure_seats_claimable(
                requested=seats(label), layout=SeatLayout.default(), occupied=set()
            )

    def test_layout_bounds_are_checked_before_occupancy(self):
        with pytest.raises(ValidationError):
            ensure_seats_claimable(
                requested=seats('Z1'), layout=SeatLayout.default(), occupied={'Z-1'}
            )
