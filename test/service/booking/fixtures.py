"""Builders for domain objects used across booking unit tests."""

from datetime import datetime, timedelta
from decimal import Decimal
import random
from typing import List, Optional

import uuid_utils

from src.platform.types.datetime_utils import utc_now
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.event_entity import EventEntity
from src.service.booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.booking.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.booking.domain.value_object.card_details import CardDetails
from src.service.booking.domain.value_object.seat import BookedSeat, SeatLayout, SelectedSeat


VALID_CARD = CardDetails(
    card_number='4111 1111 1111 1111',
    card_holder='Jane Doe',
    expiry_date='12/30',
    cvv='123',
)


def make_user(
    *, name: str = 'Jane Doe', email: str = 'jane@example.com', role: UserRole = UserRole.USER
) -> UserEntity:
    return UserEntity(
        id=uuid_utils.uuid7(), email=email, name=name, phone='555-0100', role=role
    )


def make_event(
    *,
    total_seats: int = 100,
    available_seats: Optional[int] = None,
    bookings: int = 0,
    price: Decimal = Decimal('25.00'),
    date: Optional[datetime] = None,
    seat_layout: Optional[SeatLayout] = None,
) -> EventEntity:
    return EventEntity(
        id=uuid_utils.uuid7(),
        title='Jazz Night',
        date=date or utc_now() + timedelta(days=30),
        price=price,
        total_seats=total_seats,
        available_seats=total_seats if available_seats is None else available_seats,
        bookings=bookings,
        time='19:30',
        location='Downtown',
        venue='Blue Note Hall',
        seat_layout=seat_layout,
    )


def seats(*labels: str) -> List[SelectedSeat]:
    """seats('A1', 'B12') -> [SelectedSeat('A', 1), SelectedSeat('B', 12)]"""
    parsed = []
    for label in labels:
        row = label.rstrip('0123456789')
        parsed.append(SelectedSeat(row=row, seat_number=int(label[len(row) :])))
    return parsed


def make_booking(
    *,
    event: EventEntity,
    user: UserEntity,
    number_of_tickets: int = 1,
    selected_seats: Optional[List[SelectedSeat]] = None,
    status: BookingStatus = BookingStatus.CONFIRMED,
    payment_status: PaymentStatus = PaymentStatus.PENDING,
    booking_date: Optional[datetime] = None,
) -> Booking:
    booking_date = booking_date or utc_now()
    return Booking(
        id=uuid_utils.uuid7(),
        user_id=user.id,
        event_id=event.id,
        number_of_tickets=number_of_tickets,
        total_price=event.price * number_of_tickets,
        booking_reference=f'EVT-{booking_date:%Y%m%d}-{random.randint(10000, 99999)}',
        selected_seats=list(selected_seats or []),
        status=status,
        payment_method=PaymentMethod.CASH,
        payment_status=payment_status,
        booking_date=booking_date,
        created_at=booking_date,
        updated_at=booking_date,
    )


def ledger(*labels: str) -> List[BookedSeat]:
    return [BookedSeat(row=s.row, seat=s.seat_number) for s in seats(*labels)]
