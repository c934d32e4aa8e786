from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def mark_paid_if_payable(self, *, booking: Booking) -> bool:
        """
        Record a card payment on a confirmed, not yet paid booking.

        Only payment method and payment status are written, never the booking status.

        Returns:
            False when the stored booking was cancelled or already paid
        """
        pass

    @abstractmethod
    async def set_payment_status(self, *, booking: Booking) -> bool:
        """
        Overwrite the payment status only.

        Returns:
            False when the booking no longer exists
        """
        pass

    @abstractmethod
    async def cancel_if_confirmed(self, *, booking: Booking) -> bool:
        """
        Flip a confirmed booking to cancelled.

        Returns:
            False when the stored booking was no longer confirmed
        """
        pass

    @abstractmethod
    async def reference_exists(self, *, booking_reference: str) -> bool:
        pass
