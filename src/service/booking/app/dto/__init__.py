"""Application layer DTOs"""

from src.service.booking.app.dto.booking_detail_dto import (
    BookingDetail,
    EventSummary,
    UserSummary,
)
from src.service.booking.app.dto.seat_availability_dto import (
    ReconcileResult,
    SeatAvailability,
)

__all__ = [
    'BookingDetail',
    'EventSummary',
    'ReconcileResult',
    'SeatAvailability',
    'UserSummary',
]
