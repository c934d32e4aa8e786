from typing import Optional, Self

from fastapi import Depends
from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.types.datetime_utils import utc_now
from src.platform.types.uuid7_utils_types import parse_uuid
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.domain.enum.booking_status import PaymentStatus


class UpdatePaymentStatusUseCase:
    """Administrative override of a booking's payment status, no counter side effects."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update_payment_status(
        self, *, booking_id: str, payment_status: Optional[str]
    ) -> BookingDetail:
        with self.tracer.start_as_current_span(
            'use_case.update_payment_status', attributes={'booking.id': booking_id}
        ):
            parsed_id = parse_uuid(booking_id, message='Invalid booking ID format')
            new_status = self._parse_payment_status(payment_status)

            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id(booking_id=parsed_id)
                if not booking:
                    raise NotFoundError('Booking not found')

                updated = booking.with_payment_status(new_status, now=utc_now())
                if not await self.uow.booking_command_repo.set_payment_status(booking=updated):
                    raise NotFoundError('Booking not found')
                detail = await self.uow.booking_query_repo.get_detail(booking_id=parsed_id)
                await self.uow.commit()

        Logger.base.info(
            f'💳 [PAYMENT] {booking.booking_reference} status '
            f'{booking.payment_status.value} -> {new_status.value} (admin override)'
        )
        return detail or BookingDetail(booking=updated)

    @staticmethod
    def _parse_payment_status(value: Optional[str]) -> PaymentStatus:
        if not value:
            raise ValidationError('Payment status is required')
        try:
            return PaymentStatus(value)
        except ValueError as e:
            raise ValidationError(
                f'Invalid payment status: {value}. '
                f'Must be one of: {", ".join(s.value for s in PaymentStatus)}'
            ) from e
