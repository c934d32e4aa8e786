from typing import Optional

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid
from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.orm_mapper import (
    booking_to_entity,
    selected_seats_to_json,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.id == to_std_uuid(booking_id))
            .options(noload(BookingModel.user), noload(BookingModel.event))
            .execution_options(populate_existing=True)
        )
        db_booking = result.scalar_one_or_none()
        return booking_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            id=to_std_uuid(booking.id),
            user_id=to_std_uuid(booking.user_id),
            event_id=to_std_uuid(booking.event_id),
            number_of_tickets=booking.number_of_tickets,
            selected_seats=selected_seats_to_json(booking.selected_seats),
            total_price=booking.total_price,
            status=booking.status.value,
            payment_method=booking.payment_method.value,
            payment_status=booking.payment_status.value,
            booking_reference=booking.booking_reference,
            booking_date=booking.booking_date,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
        self.session.add(db_booking)
        await self.session.flush()
        return booking

    @Logger.io
    async def mark_paid_if_payable(self, *, booking: Booking) -> bool:
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == to_std_uuid(booking.id),
                BookingModel.status == BookingStatus.CONFIRMED.value,
                BookingModel.payment_status != PaymentStatus.PAID.value,
            )
            .values(
                payment_method=booking.payment_method.value,
                payment_status=booking.payment_status.value,
                updated_at=booking.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # pyright: ignore[reportAttributeAccessIssue]

    @Logger.io
    async def set_payment_status(self, *, booking: Booking) -> bool:
        result = await self.session.execute(
            update(BookingModel)
            .where(BookingModel.id == to_std_uuid(booking.id))
            .values(payment_status=booking.payment_status.value, updated_at=booking.updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # pyright: ignore[reportAttributeAccessIssue]

    @Logger.io
    async def cancel_if_confirmed(self, *, booking: Booking) -> bool:
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == to_std_uuid(booking.id),
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
            .values(status=BookingStatus.CANCELLED.value, updated_at=booking.updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # pyright: ignore[reportAttributeAccessIssue]

    @Logger.io
    async def reference_exists(self, *, booking_reference: str) -> bool:
        result = await self.session.execute(
            select(exists().where(BookingModel.booking_reference == booking_reference))
        )
        return bool(result.scalar())
