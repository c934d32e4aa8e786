from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import ConflictError, DomainError
from src.service.booking.domain.enum.event_status import EventStatus
from src.service.booking.domain.value_object.seat import SeatLayout


@attrs.define
class EventEntity:
    """
    The slice of an event the booking core reads and writes.

    Catalog fields (title, venue, ...) are owned by event management and only
    read here. The core writes back available_seats, bookings and the cached
    seat ledger in seat_layout.booked_seats.
    """

    id: UUID
    title: str
    date: datetime
    price: Decimal
    total_seats: int
    available_seats: int
    bookings: int = 0
    time: str = ''
    location: str = ''
    venue: str = ''
    image_url: Optional[str] = None
    category: Optional[str] = None
    seat_layout: Optional[SeatLayout] = None
    status: EventStatus = EventStatus.UPCOMING

    def is_past(self, *, now: datetime) -> bool:
        return self.date < now

    def ensure_bookable(self, *, now: datetime, number_of_tickets: int) -> None:
        if self.is_past(now=now):
            raise DomainError('Cannot book tickets for past events')
        if self.available_seats < number_of_tickets:
            raise ConflictError(f'Only {self.available_seats} seats available')

    def ensure_cancellable(self, *, now: datetime) -> None:
        if self.is_past(now=now):
            raise DomainError('Cannot cancel booking for past events')
