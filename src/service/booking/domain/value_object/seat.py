"""
Seat value objects

A seat is addressed by a row label ("A", "B", ... "Z", "AA", ...) and a
1-based seat number. Its identity inside an event is the seat id
"<row>-<seatNumber>", compared as an exact, case-sensitive string.
"""

from typing import Any, Dict, List

import attrs

from src.platform.exception.exceptions import ValidationError
from src.service.booking.domain.enum.seat_layout_type import SeatLayoutType


DEFAULT_ROWS = 10
DEFAULT_SEATS_PER_ROW = 12


def row_label(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA (spreadsheet-style)."""
    label = ''
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        label = chr(65 + remainder) + label
    return label


def build_seat_id(row: str, seat_number: int) -> str:
    return f'{row}-{seat_number}'


@attrs.frozen
class SelectedSeat:
    row: str
    seat_number: int

    @property
    def seat_id(self) -> str:
        return build_seat_id(self.row, self.seat_number)

    @property
    def label(self) -> str:
        """Human form used in messages and emails, e.g. A1."""
        return f'{self.row}{self.seat_number}'


@attrs.frozen
class BookedSeat:
    """Ledger entry cached on the event: {row, seat}."""

    row: str
    seat: int

    @property
    def seat_id(self) -> str:
        return build_seat_id(self.row, self.seat)


@attrs.define
class SeatLayout:
    rows: int = DEFAULT_ROWS
    seats_per_row: int = DEFAULT_SEATS_PER_ROW
    layout: SeatLayoutType = SeatLayoutType.STANDARD
    booked_seats: List[BookedSeat] = attrs.field(factory=list)
    seat_categories: Dict[str, Any] = attrs.field(factory=dict)

    @classmethod
    def default(
        cls, *, rows: int = DEFAULT_ROWS, seats_per_row: int = DEFAULT_SEATS_PER_ROW
    ) -> 'SeatLayout':
        return cls(rows=rows, seats_per_row=seats_per_row, layout=SeatLayoutType.STANDARD)

    def row_labels(self) -> List[str]:
        return [row_label(i) for i in range(self.rows)]

    def validate_seat(self, seat: SelectedSeat) -> None:
        """
        Reject seats outside the configured grid.

        Raises:
            ValidationError: unknown row label or seat number out of [1, seats_per_row]
        """
        if seat.row not in self.row_labels():
            last_row = row_label(self.rows - 1) if self.rows > 0 else 'A'
            raise ValidationError(
                f'Invalid seat {seat.label}: row must be between A and {last_row}'
            )
        if not 1 <= seat.seat_number <= self.seats_per_row:
            raise ValidationError(
                f'Invalid seat {seat.label}: seat number must be between 1 and {self.seats_per_row}'
            )

    def with_booked_seats(self, booked_seats: List[BookedSeat]) -> 'SeatLayout':
        return attrs.evolve(self, booked_seats=list(booked_seats))
