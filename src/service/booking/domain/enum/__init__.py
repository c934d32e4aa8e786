"""Booking Domain Enums"""

from src.service.booking.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.booking.domain.enum.event_status import EventStatus
from src.service.booking.domain.enum.seat_layout_type import SeatLayoutType

__all__ = ['BookingStatus', 'EventStatus', 'PaymentMethod', 'PaymentStatus', 'SeatLayoutType']
