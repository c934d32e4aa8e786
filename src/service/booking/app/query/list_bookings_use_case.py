from typing import List, Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import parse_uuid
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.domain.entity.user_entity import UserEntity


class ListBookingsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_user_bookings(self, *, user: UserEntity) -> List[BookingDetail]:
        async with self.uow:
            return await self.uow.booking_query_repo.list_by_user(user_id=user.id)

    @Logger.io
    async def list_all_bookings(self) -> List[BookingDetail]:
        async with self.uow:
            return await self.uow.booking_query_repo.list_all()

    @Logger.io
    async def list_event_bookings(self, *, event_id: str) -> List[BookingDetail]:
        """Confirmed bookings of one event, with attendee contact details."""
        parsed_id = parse_uuid(event_id, message='Invalid event ID format')
        async with self.uow:
            return await self.uow.booking_query_repo.list_confirmed_details_by_event(
                event_id=parsed_id
            )
