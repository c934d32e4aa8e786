from datetime import datetime, timezone
from decimal import Decimal
import random
from typing import List, Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import ConflictError, ForbiddenError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.booking.domain.value_object.card_details import CardDetails
from src.service.booking.domain.value_object.seat import SelectedSeat


MIN_TICKETS_PER_BOOKING = 1
MAX_TICKETS_PER_BOOKING = 10


def generate_booking_reference(*, now: datetime, rng: random.Random | None = None) -> str:
    """EVT-<YYYYMMDD>-<5 digits>, dated by creation day (UTC)."""
    rng = rng or random.Random()
    day = now.astimezone(timezone.utc).strftime('%Y%m%d')
    return f'EVT-{day}-{rng.randint(10000, 99999)}'


def validate_ticket_count(
    number_of_tickets: int, *, max_tickets: int = MAX_TICKETS_PER_BOOKING
) -> None:
    if number_of_tickets < MIN_TICKETS_PER_BOOKING:
        raise ValidationError('Number of tickets must be at least 1')
    if number_of_tickets > max_tickets:
        raise ValidationError(f'Cannot book more than {max_tickets} tickets at once')


@attrs.define
class Booking:
    id: UUID
    user_id: UUID
    event_id: UUID
    number_of_tickets: int
    total_price: Decimal
    booking_reference: str
    selected_seats: List[SelectedSeat] = attrs.field(factory=list)
    status: BookingStatus = BookingStatus.CONFIRMED
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.PENDING
    booking_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        user_id: UUID,
        event_id: UUID,
        number_of_tickets: int,
        unit_price: Decimal,
        booking_reference: str,
        selected_seats: List[SelectedSeat],
        payment_method: PaymentMethod = PaymentMethod.CASH,
        card_details: Optional[CardDetails] = None,
        now: datetime,
        max_tickets: int = MAX_TICKETS_PER_BOOKING,
    ) -> 'Booking':
        """
        Build a confirmed booking with its price frozen at creation time.

        Card payments supplied together with the booking only need every card
        field present to be recorded as paid. The strict card rules belong to
        the payment endpoint.

        Raises:
            ValidationError: ticket count out of bounds, or card details partially filled
        """
        validate_ticket_count(number_of_tickets, max_tickets=max_tickets)
        if unit_price < 0:
            raise ValidationError('Price cannot be negative')

        payment_status = PaymentStatus.PENDING
        if payment_method == PaymentMethod.CARD and card_details is not None:
            if not card_details.is_complete():
                raise ValidationError('Invalid payment details')
            payment_status = PaymentStatus.PAID

        return cls(
            id=id,
            user_id=user_id,
            event_id=event_id,
            number_of_tickets=number_of_tickets,
            total_price=unit_price * number_of_tickets,
            booking_reference=booking_reference,
            selected_seats=list(selected_seats),
            status=BookingStatus.CONFIRMED,
            payment_method=payment_method,
            payment_status=payment_status,
            booking_date=now,
            created_at=now,
            updated_at=now,
        )

    def ensure_owned_by(self, user_id: UUID, *, action: str) -> None:
        if str(self.user_id) != str(user_id):
            raise ForbiddenError(f'Not authorized to {action} this booking')

    @Logger.io
    def cancel(self, *, now: datetime) -> 'Booking':
        """
        Raises:
            ConflictError: booking is already cancelled
        """
        if self.status == BookingStatus.CANCELLED:
            raise ConflictError('Booking is already cancelled')
        return attrs.evolve(self, status=BookingStatus.CANCELLED, updated_at=now)

    @Logger.io
    def validate_can_be_paid(self) -> None:
        if self.payment_status == PaymentStatus.PAID:
            raise ConflictError('Booking is already paid')
        if self.status == BookingStatus.CANCELLED:
            raise ConflictError('Cannot process payment for a cancelled booking')

    @Logger.io
    def mark_as_paid(self, *, now: datetime) -> 'Booking':
        return attrs.evolve(
            self,
            payment_status=PaymentStatus.PAID,
            payment_method=PaymentMethod.CARD,
            updated_at=now,
        )

    def with_payment_status(self, payment_status: PaymentStatus, *, now: datetime) -> 'Booking':
        return attrs.evolve(self, payment_status=payment_status, updated_at=now)
