from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_detail(self, *, booking_id: UUID) -> Optional[BookingDetail]:
        """Booking with event summary and user name/email"""
        pass

    @abstractmethod
    async def list_confirmed_by_event(self, *, event_id: UUID) -> List[Booking]:
        """Confirmed bookings of an event, oldest first (occupancy source of truth)"""
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: UUID) -> List[BookingDetail]:
        """Newest booking first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[BookingDetail]:
        """Newest booking first"""
        pass

    @abstractmethod
    async def list_confirmed_details_by_event(self, *, event_id: UUID) -> List[BookingDetail]:
        """Confirmed bookings with user name, email and phone"""
        pass
