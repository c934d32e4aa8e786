from abc import ABC, abstractmethod

from src.service.booking.app.dto.booking_detail_dto import BookingDetail


class INotificationService(ABC):
    """
    Outbound booking notifications.

    Callers treat delivery as best effort: a failure is logged and never
    turns a successful booking or payment into an error.
    """

    @abstractmethod
    async def send_booking_confirmation(
        self, *, to_email: str, user_name: str, booking: BookingDetail
    ) -> None:
        pass
