"""Booking Domain Value Objects"""

from src.service.booking.domain.value_object.card_details import CardDetails
from src.service.booking.domain.value_object.seat import BookedSeat, SeatLayout, SelectedSeat

__all__ = ['BookedSeat', 'CardDetails', 'SeatLayout', 'SelectedSeat']
