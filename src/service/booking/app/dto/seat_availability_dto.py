import attrs
from uuid_utils import UUID

from src.service.booking.domain.value_object.seat import SeatLayout


@attrs.define(frozen=True)
class SeatAvailability:
    """Seat layout with a ledger freshly rebuilt from confirmed bookings."""

    seat_layout: SeatLayout
    available_seats: int
    total_seats: int


@attrs.define(frozen=True)
class ReconcileResult:
    event_id: UUID
    available_seats_before: int
    available_seats_after: int
    bookings_before: int
    bookings_after: int
    booked_seats: int

    @property
    def drift_detected(self) -> bool:
        return (
            self.available_seats_before != self.available_seats_after
            or self.bookings_before != self.bookings_after
        )
