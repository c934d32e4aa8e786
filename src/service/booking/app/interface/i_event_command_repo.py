from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.booking.domain.entity.event_entity import EventEntity
from src.service.booking.domain.value_object.seat import SeatLayout


class IEventCommandRepo(ABC):
    """
    Capacity counters and seat ledger of an event.

    Counter changes are single conditional UPDATE statements so concurrent
    writers cannot lose each other's decrements.
    """

    @abstractmethod
    async def get_by_id(self, *, event_id: UUID) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def reserve_capacity(self, *, event_id: UUID, number_of_tickets: int) -> bool:
        """
        available_seats -= n and bookings += 1, only while available_seats >= n.

        Returns:
            False when the guard rejected the update (not enough seats left)
        """
        pass

    @abstractmethod
    async def release_capacity(self, *, event_id: UUID, number_of_tickets: int) -> None:
        """available_seats += n and bookings -= 1"""
        pass

    @abstractmethod
    async def save_seat_layout(self, *, event_id: UUID, seat_layout: SeatLayout) -> None:
        """Overwrite the layout, including the cached booked-seat ledger"""
        pass

    @abstractmethod
    async def set_counters(self, *, event_id: UUID, available_seats: int, bookings: int) -> None:
        pass
