"""
Seat Occupancy Domain

Pure occupancy logic, no infrastructure. Confirmed bookings are the source of
truth. The event's booked-seat ledger is a cache rebuilt from them.
"""

from collections.abc import Iterable, Sequence
from typing import List, Optional, Set

from src.platform.exception.exceptions import ConflictError, ValidationError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.value_object.seat import BookedSeat, SeatLayout, SelectedSeat


def _confirmed(bookings: Iterable[Booking]) -> Iterable[Booking]:
    return (booking for booking in bookings if booking.status == BookingStatus.CONFIRMED)


def build_booked_seat_ledger(bookings: Iterable[Booking]) -> List[BookedSeat]:
    """Flatten the seats of confirmed bookings, in booking order."""
    return [
        BookedSeat(row=seat.row, seat=seat.seat_number)
        for booking in _confirmed(bookings)
        for seat in booking.selected_seats
    ]


def occupied_seat_ids(bookings: Iterable[Booking]) -> Set[str]:
    return {seat.seat_id for seat in build_booked_seat_ledger(bookings)}


def confirmed_ticket_count(bookings: Iterable[Booking]) -> int:
    return sum(booking.number_of_tickets for booking in _confirmed(bookings))


def confirmed_booking_count(bookings: Iterable[Booking]) -> int:
    return sum(1 for _ in _confirmed(bookings))


def find_first_taken_seat(
    requested: Sequence[SelectedSeat], occupied: Set[str]
) -> Optional[SelectedSeat]:
    return next((seat for seat in requested if seat.seat_id in occupied), None)


def validate_seat_selection(
    *, requested: Sequence[SelectedSeat], number_of_tickets: int
) -> None:
    """Request-shape checks that need no stored state."""
    if requested and len(requested) != number_of_tickets:
        raise ValidationError(
            f'Number of selected seats ({len(requested)}) must match '
            f'number of tickets ({number_of_tickets})'
        )
    seen: Set[str] = set()
    for seat in requested:
        if seat.seat_id in seen:
            raise ValidationError(f'Seat {seat.label} is selected more than once')
        seen.add(seat.seat_id)


def ensure_seats_claimable(
    *, requested: Sequence[SelectedSeat], layout: SeatLayout, occupied: Set[str]
) -> None:
    """
    Raises:
        ValidationError: a seat lies outside the layout
        ConflictError: a seat is held by a confirmed booking, naming the first one
    """
    for seat in requested:
        layout.validate_seat(seat)
    if taken := find_first_taken_seat(requested, occupied):
        raise ConflictError(f'Seat {taken.label} is already booked')
