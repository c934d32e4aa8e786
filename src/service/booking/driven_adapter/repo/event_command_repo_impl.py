from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid
from src.service.booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.booking.domain.entity.event_entity import EventEntity
from src.service.booking.domain.value_object.seat import SeatLayout
from src.service.booking.driven_adapter.model.event_model import EventModel
from src.service.booking.driven_adapter.repo.orm_mapper import (
    event_to_entity,
    seat_layout_to_json,
)


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, event_id: UUID) -> Optional[EventEntity]:
        # populate_existing: counters may have been changed by UPDATE statements in this session
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == to_std_uuid(event_id))
            .execution_options(populate_existing=True)
        )
        db_event = result.scalar_one_or_none()
        return event_to_entity(db_event) if db_event else None

    @Logger.io
    async def reserve_capacity(self, *, event_id: UUID, number_of_tickets: int) -> bool:
        result = await self.session.execute(
            update(EventModel)
            .where(
                EventModel.id == to_std_uuid(event_id),
                EventModel.available_seats >= number_of_tickets,
            )
            .values(
                available_seats=EventModel.available_seats - number_of_tickets,
                bookings=EventModel.bookings + 1,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # pyright: ignore[reportAttributeAccessIssue]

    @Logger.io
    async def release_capacity(self, *, event_id: UUID, number_of_tickets: int) -> None:
        await self.session.execute(
            update(EventModel)
            .where(EventModel.id == to_std_uuid(event_id))
            .values(
                available_seats=EventModel.available_seats + number_of_tickets,
                bookings=EventModel.bookings - 1,
            )
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def save_seat_layout(self, *, event_id: UUID, seat_layout: SeatLayout) -> None:
        await self.session.execute(
            update(EventModel)
            .where(EventModel.id == to_std_uuid(event_id))
            .values(seat_layout=seat_layout_to_json(seat_layout))
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def set_counters(self, *, event_id: UUID, available_seats: int, bookings: int) -> None:
        await self.session.execute(
            update(EventModel)
            .where(EventModel.id == to_std_uuid(event_id))
            .values(available_seats=available_seats, bookings=bookings)
            .execution_options(synchronize_session=False)
        )
