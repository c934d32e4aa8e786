from typing import Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import parse_uuid
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.domain.entity.user_entity import UserEntity


class GetBookingUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_booking(self, *, booking_id: str, user: UserEntity) -> BookingDetail:
        """Owner-only read of a booking with its event and user summaries."""
        parsed_id = parse_uuid(booking_id, message='Invalid booking ID format')

        async with self.uow:
            detail = await self.uow.booking_query_repo.get_detail(booking_id=parsed_id)

        if detail is None:
            raise NotFoundError('Booking not found')
        detail.booking.ensure_owned_by(user.id, action='view')
        return detail
