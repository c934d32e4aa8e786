from datetime import datetime
import time
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.platform.state.event_lock import EventLockRegistry
from src.platform.types.datetime_utils import utc_now
from src.platform.types.uuid7_utils_types import parse_uuid
from src.service.booking.app.command.booking_confirmation import (
    send_confirmation_best_effort,
    with_user_fallback,
)
from src.service.booking.app.dto.booking_detail_dto import BookingDetail
from src.service.booking.app.dto.create_booking_dto import CreateBookingCommand
from src.service.booking.app.interface.i_notification_service import INotificationService
from src.service.booking.domain.entity.booking_entity import (
    Booking,
    generate_booking_reference,
    validate_ticket_count,
)
from src.service.booking.domain.entity.user_entity import UserEntity
from src.service.booking.domain.enum.booking_status import PaymentMethod
from src.service.booking.domain.seat_occupancy_domain import (
    ensure_seats_claimable,
    occupied_seat_ids,
    validate_seat_selection,
)
from src.service.booking.domain.value_object.seat import BookedSeat, SeatLayout, SelectedSeat


REFERENCE_ATTEMPTS = 5


class CreateBookingUseCase:
    """
    Turn a seat request into a confirmed booking.

    Flow (fail fast, each step with its own message):
    1. event id and ticket count present, ticket count within bounds
    2. selected seats match the ticket count
    3. event exists
    4. event not in the past
    5. enough seats left
    6. selected seats inside the layout and not held by a confirmed booking
    7. price frozen as event.price * tickets
    8. card details supplied with a card booking mark it paid

    Steps 3-8 run under the event's lock and in one transaction: the booking
    insert, the guarded counter decrement and the ledger append commit
    together or not at all.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        notification_service: INotificationService,
        lock_registry: EventLockRegistry,
        settings: Settings,
        metrics: BookingMetrics,
    ) -> None:
        self.uow = uow
        self.notification_service = notification_service
        self.lock_registry = lock_registry
        self.settings = settings
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
        lock_registry: EventLockRegistry = Depends(Provide[Container.event_lock_registry]),
        settings: Settings = Depends(Provide[Container.config_service]),
        metrics: BookingMetrics = Depends(Provide[Container.booking_metrics]),
    ) -> Self:
        return cls(
            uow=uow,
            notification_service=notification_service,
            lock_registry=lock_registry,
            settings=settings,
            metrics=metrics,
        )

    @Logger.io
    async def create_booking(
        self, *, user: UserEntity, command: CreateBookingCommand
    ) -> BookingDetail:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'booking.event_id': str(command.event_id or '')},
        ):
            try:
                detail = await self._create(user=user, command=command)
            except CustomBaseError:
                self.metrics.record_booking(result='rejected')
                raise

        booking = detail.booking
        self.metrics.record_booking(
            result='success',
            tickets=booking.number_of_tickets,
            duration=time.perf_counter() - started,
        )
        Logger.base.info(
            f'🎫 [BOOKING] {booking.booking_reference} created: '
            f'{booking.number_of_tickets} ticket(s) for event {booking.event_id}'
        )

        await send_confirmation_best_effort(self.notification_service, detail=detail)
        return detail

    async def _create(self, *, user: UserEntity, command: CreateBookingCommand) -> BookingDetail:
        # Step 1
        if not command.event_id or command.number_of_tickets is None:
            raise ValidationError('Event ID and number of tickets are required')
        number_of_tickets = command.number_of_tickets
        validate_ticket_count(number_of_tickets, max_tickets=self.settings.MAX_TICKETS_PER_BOOKING)
        event_id = parse_uuid(command.event_id, message='Invalid event ID format')
        payment_method = self._parse_payment_method(command.payment_method)

        # Step 2
        requested: List[SelectedSeat] = list(command.selected_seats)
        validate_seat_selection(requested=requested, number_of_tickets=number_of_tickets)

        async with self.lock_registry.hold(key=str(event_id)):
            async with self.uow:
                # Step 3
                event = await self.uow.event_command_repo.get_by_id(event_id=event_id)
                if not event:
                    raise NotFoundError('Event not found')

                # Steps 4-5
                now = utc_now()
                event.ensure_bookable(now=now, number_of_tickets=number_of_tickets)

                # Step 6: occupancy re-derived from confirmed bookings, not the cached ledger
                layout: Optional[SeatLayout] = None
                if requested:
                    layout = event.seat_layout or SeatLayout.default(
                        rows=self.settings.DEFAULT_SEAT_ROWS,
                        seats_per_row=self.settings.DEFAULT_SEATS_PER_ROW,
                    )
                    confirmed = await self.uow.booking_query_repo.list_confirmed_by_event(
                        event_id=event_id
                    )
                    ensure_seats_claimable(
                        requested=requested, layout=layout, occupied=occupied_seat_ids(confirmed)
                    )

                # Steps 7-8
                booking = Booking.create(
                    id=uuid_utils.uuid7(),
                    user_id=user.id,
                    event_id=event_id,
                    number_of_tickets=number_of_tickets,
                    unit_price=event.price,
                    booking_reference=await self._new_booking_reference(now=now),
                    selected_seats=requested,
                    payment_method=payment_method,
                    card_details=command.payment_details,
                    now=now,
                    max_tickets=self.settings.MAX_TICKETS_PER_BOOKING,
                )

                # Guarded decrement, zero rows means another writer took the seats
                if not await self.uow.event_command_repo.reserve_capacity(
                    event_id=event_id, number_of_tickets=number_of_tickets
                ):
                    latest = await self.uow.event_command_repo.get_by_id(event_id=event_id)
                    remaining = latest.available_seats if latest else 0
                    raise ConflictError(f'Only {remaining} seats available')

                await self.uow.booking_command_repo.create(booking=booking)

                if layout is not None:
                    new_seats = [BookedSeat(row=s.row, seat=s.seat_number) for s in requested]
                    await self.uow.event_command_repo.save_seat_layout(
                        event_id=event_id,
                        seat_layout=layout.with_booked_seats([*layout.booked_seats, *new_seats]),
                    )

                detail = await self.uow.booking_query_repo.get_detail(booking_id=booking.id)
                await self.uow.commit()

        if detail is None:
            raise InternalError('Booking could not be loaded after creation')
        return with_user_fallback(detail, user=user)

    @staticmethod
    def _parse_payment_method(value: Optional[str]) -> PaymentMethod:
        if not value:
            return PaymentMethod.CASH
        try:
            return PaymentMethod(value)
        except ValueError as e:
            raise ValidationError(
                f'Invalid payment method: {value}. '
                f'Must be one of: {", ".join(m.value for m in PaymentMethod)}'
            ) from e

    async def _new_booking_reference(self, *, now: datetime) -> str:
        for _ in range(REFERENCE_ATTEMPTS):
            reference = generate_booking_reference(now=now)
            if not await self.uow.booking_command_repo.reference_exists(
                booking_reference=reference
            ):
                return reference
        raise InternalError('Could not allocate a unique booking reference')
