from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.platform.state.event_lock import EventLockRegistry
from src.platform.types.datetime_utils import utc_now
from src.platform.types.uuid7_utils_types import parse_uuid
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.domain.entity.user_entity import UserEntity


class CancelBookingUseCase:
    """
    Cancel a booking and give its seats back to the event.

    The status flip and the counter release share one transaction. The flip is
    conditional on the stored status still being confirmed, so two racing
    cancels release capacity once. The seat ledger is left as is and gets
    rebuilt by the next availability read.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        lock_registry: EventLockRegistry,
        metrics: BookingMetrics,
    ) -> None:
        self.uow = uow
        self.lock_registry = lock_registry
        self.metrics = metrics
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        lock_registry: EventLockRegistry = Depends(Provide[Container.event_lock_registry]),
        metrics: BookingMetrics = Depends(Provide[Container.booking_metrics]),
    ) -> Self:
        return cls(uow=uow, lock_registry=lock_registry, metrics=metrics)

    @Logger.io
    async def cancel_booking(self, *, booking_id: str, user: UserEntity) -> BookingDetail:
        """
        Raises:
            ValidationError: malformed booking id
            NotFoundError: booking absent
            ForbiddenError: caller does not own the booking
            ConflictError: booking already cancelled
            DomainError: the event already took place
        """
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking', attributes={'booking.id': booking_id}
        ):
            parsed_id = parse_uuid(booking_id, message='Invalid booking ID format')

            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id(booking_id=parsed_id)
                if not booking:
                    raise NotFoundError('Booking not found')
                booking.ensure_owned_by(user.id, action='cancel')

                async with self.lock_registry.hold(key=str(booking.event_id)):
                    now = utc_now()
                    cancelled = booking.cancel(now=now)

                    event = await self.uow.event_command_repo.get_by_id(event_id=booking.event_id)
                    if event:
                        event.ensure_cancellable(now=now)

                    if not await self.uow.booking_command_repo.cancel_if_confirmed(
                        booking=cancelled
                    ):
                        raise ConflictError('Booking is already cancelled')
                    if event:
                        await self.uow.event_command_repo.release_capacity(
                            event_id=booking.event_id,
                            number_of_tickets=booking.number_of_tickets,
                        )

                    detail = await self.uow.booking_query_repo.get_detail(booking_id=parsed_id)
                    await self.uow.commit()

        self.metrics.record_cancellation()
        Logger.base.info(
            f'🎫 [BOOKING] {booking.booking_reference} cancelled, '
            f'{booking.number_of_tickets} seat(s) released on event {booking.event_id}'
        )
        return detail or BookingDetail(booking=cancelled)
