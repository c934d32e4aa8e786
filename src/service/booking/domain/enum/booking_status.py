"""
Booking lifecycle enums - Domain Value Objects

Only confirmed bookings count against event capacity.
"""

from enum import StrEnum


class BookingStatus(StrEnum):
    CONFIRMED = 'confirmed'
    PENDING = 'pending'
    CANCELLED = 'cancelled'


class PaymentMethod(StrEnum):
    CASH = 'cash'
    CARD = 'card'
    UPI = 'upi'
    WALLET = 'wallet'


class PaymentStatus(StrEnum):
    PAID = 'paid'
    PENDING = 'pending'
    REFUNDED = 'refunded'
