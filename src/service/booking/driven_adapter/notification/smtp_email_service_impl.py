"""SMTP email backend (aiosmtplib)."""

from email.message import EmailMessage

from aiosmtplib import send

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.app.interface.i_notification_service import INotificationService
from src.service.booking.driven_adapter.notification.booking_email_template import (
    render_booking_confirmation,
)


class SmtpEmailServiceImpl(INotificationService):
    def __init__(self, *, settings: Settings) -> None:
        self.settings = settings

    def _build_message(self, *, to_email: str, user_name: str, booking: BookingDetail) -> EmailMessage:
        email = render_booking_confirmation(user_name=user_name, detail=booking)
        msg = EmailMessage()
        msg['From'] = self.settings.EMAIL_FROM
        msg['To'] = to_email
        msg['Subject'] = email.subject
        msg.set_content(email.text)
        msg.add_alternative(email.html, subtype='html')
        return msg

    @Logger.io
    async def send_booking_confirmation(
        self, *, to_email: str, user_name: str, booking: BookingDetail
    ) -> None:
        msg = self._build_message(to_email=to_email, user_name=user_name, booking=booking)
        password = self.settings.SMTP_PASSWORD.get_secret_value()
        await send(
            msg,
            hostname=self.settings.SMTP_HOST,
            port=self.settings.SMTP_PORT,
            username=self.settings.SMTP_USERNAME or None,
            password=password or None,
            start_tls=self.settings.SMTP_START_TLS,
            timeout=self.settings.SMTP_TIMEOUT,
        )
        Logger.base.info(f'📧 [SMTP] Booking confirmation sent to {to_email}')
