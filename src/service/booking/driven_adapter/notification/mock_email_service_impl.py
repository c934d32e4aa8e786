"""Mock email backend: records and logs instead of delivering."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.app.interface.i_notification_service import INotificationService
from src.service.booking.driven_adapter.notification.booking_email_template import (
    render_booking_confirmation,
)


class MockEmailServiceImpl(INotificationService):
    def __init__(self) -> None:
        self.sent_emails: List[Dict[str, Any]] = []  # Store sent emails for testing

    @Logger.io
    async def send_booking_confirmation(
        self, *, to_email: str, user_name: str, booking: BookingDetail
    ) -> None:
        email = render_booking_confirmation(user_name=user_name, detail=booking)
        self.sent_emails.append(
            {
                'to': to_email,
                'subject': email.subject,
                'body': email.text,
                'booking_reference': booking.booking.booking_reference,
                'sent_at': datetime.now(timezone.utc),
            }
        )
        Logger.base.info(f'📧 [MOCK EMAIL] {email.subject} -> {to_email}')
