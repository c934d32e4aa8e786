from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.orm_mapper import (
    booking_to_detail,
    booking_to_entity,
)


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_detail(self, *, booking_id: UUID) -> Optional[BookingDetail]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.id == to_std_uuid(booking_id))
            .execution_options(populate_existing=True)
        )
        db_booking = result.scalar_one_or_none()
        return booking_to_detail(db_booking, include_phone=True) if db_booking else None

    @Logger.io
    async def list_confirmed_by_event(self, *, event_id: UUID) -> List[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(
                BookingModel.event_id == to_std_uuid(event_id),
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
            .options(noload(BookingModel.user), noload(BookingModel.event))
            .order_by(BookingModel.booking_date.asc(), BookingModel.id.asc())
            .execution_options(populate_existing=True)
        )
        return [booking_to_entity(db_booking) for db_booking in result.scalars().all()]

    @Logger.io
    async def list_by_user(self, *, user_id: UUID) -> List[BookingDetail]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.user_id == to_std_uuid(user_id))
            .options(noload(BookingModel.user))
            .order_by(BookingModel.booking_date.desc())
        )
        return [booking_to_detail(db_booking) for db_booking in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[BookingDetail]:
        result = await self.session.execute(
            select(BookingModel).order_by(BookingModel.booking_date.desc())
        )
        return [booking_to_detail(db_booking) for db_booking in result.scalars().all()]

    @Logger.io
    async def list_confirmed_details_by_event(self, *, event_id: UUID) -> List[BookingDetail]:
        result = await self.session.execute(
            select(BookingModel)
            .where(
                BookingModel.event_id == to_std_uuid(event_id),
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
            .options(noload(BookingModel.event))
            .order_by(BookingModel.booking_date.desc())
        )
        return [
            booking_to_detail(db_booking, include_phone=True)
            for db_booking in result.scalars().all()
        ]
