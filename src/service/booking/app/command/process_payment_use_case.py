from typing import NoReturn, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    NotFoundError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.platform.types.datetime_utils import utc_now
from src.platform.types.uuid7_utils_types import parse_uuid
from src.service.booking.app.command.booking_confirmation import (
    send_confirmation_best_effort,
    with_user_fallback,
)
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.app.interface.i_notification_service import INotificationService
from src.service.booking.domain.entity.user_entity import UserEntity
from src.service.booking.domain.value_object.card_details import CardDetails


class ProcessPaymentUseCase:
    """
    Settle a booking with card details (demo validation, no gateway).

    Unlike the card details accepted at booking time, here the card number
    must be 13-19 digits and the CVV 3-4 digits.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        notification_service: INotificationService,
        metrics: BookingMetrics,
    ) -> None:
        self.uow = uow
        self.notification_service = notification_service
        self.metrics = metrics
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        notification_service: INotificationService = Depends(
            Provide[Container.notification_service]
        ),
        metrics: BookingMetrics = Depends(Provide[Container.booking_metrics]),
    ) -> Self:
        return cls(uow=uow, notification_service=notification_service, metrics=metrics)

    @Logger.io
    async def process_payment(
        self,
        *,
        booking_id: Optional[str],
        payment_details: Optional[CardDetails],
        user: UserEntity,
    ) -> BookingDetail:
        with self.tracer.start_as_current_span(
            'use_case.process_payment', attributes={'booking.id': booking_id or ''}
        ):
            try:
                detail = await self._process(
                    booking_id=booking_id, payment_details=payment_details, user=user
                )
            except CustomBaseError:
                self.metrics.record_payment(result='rejected')
                raise

        self.metrics.record_payment(result='paid')
        Logger.base.info(f'💳 [PAYMENT] {detail.booking.booking_reference} paid by card')

        await send_confirmation_best_effort(self.notification_service, detail=detail)
        return detail

    async def _process(
        self,
        *,
        booking_id: Optional[str],
        payment_details: Optional[CardDetails],
        user: UserEntity,
    ) -> BookingDetail:
        if not booking_id or payment_details is None:
            raise ValidationError('Booking ID and payment details are required')
        parsed_id = parse_uuid(booking_id, message='Invalid booking ID format')

        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id(booking_id=parsed_id)
            if not booking:
                raise NotFoundError('Booking not found')
            booking.ensure_owned_by(user.id, action='process payment for')
            booking.validate_can_be_paid()
            payment_details.validate_for_payment()

            paid = booking.mark_as_paid(now=utc_now())
            if not await self.uow.booking_command_repo.mark_paid_if_payable(booking=paid):
                await self._raise_payment_conflict(booking_id=parsed_id)
            detail = await self.uow.booking_query_repo.get_detail(booking_id=parsed_id)
            await self.uow.commit()

        return with_user_fallback(detail or BookingDetail(booking=paid), user=user)

    async def _raise_payment_conflict(self, *, booking_id: UUID) -> NoReturn:
        # A cancel or another payment committed after our read
        current = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
        if current is None:
            raise NotFoundError('Booking not found')
        current.validate_can_be_paid()
        raise ConflictError('Booking is already paid')
