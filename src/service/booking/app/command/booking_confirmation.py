import attrs

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_detail_dto import BookingDetail, UserSummary
from src.service.booking.app.interface.i_notification_service import INotificationService
from src.service.booking.domain.entity.user_entity import UserEntity


def with_user_fallback(detail: BookingDetail, *, user: UserEntity) -> BookingDetail:
    """Fill the user summary from the caller's identity when no account row is stored."""
    if detail.user is not None:
        return detail
    return attrs.evolve(detail, user=UserSummary(id=user.id, name=user.name, email=user.email))


async def send_confirmation_best_effort(
    notification_service: INotificationService, *, detail: BookingDetail
) -> bool:
    """Delivery failures are logged and reported as False, never raised."""
    if detail.user is None or not detail.user.email:
        Logger.base.warning(
            f'📧 [NOTIFY] No recipient for booking {detail.booking.booking_reference}, skipped'
        )
        return False
    try:
        await notification_service.send_booking_confirmation(
            to_email=detail.user.email, user_name=detail.user.name, booking=detail
        )
    except Exception as e:
        Logger.base.error(
            f'📧 [NOTIFY] Failed to send confirmation for {detail.booking.booking_reference}: {e}'
        )
        return False
    return True
