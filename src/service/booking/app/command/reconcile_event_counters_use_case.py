from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.platform.state.event_lock import EventLockRegistry
from src.platform.types.uuid7_utils_types import parse_uuid
from src.service.booking.app.dto.seat_availability_dto import ReconcileResult
from src.service.booking.domain.seat_occupancy_domain import (
    build_booked_seat_ledger,
    confirmed_booking_count,
    confirmed_ticket_count,
)
from src.service.booking.domain.value_object.seat import SeatLayout


class ReconcileEventCountersUseCase:
    """
    Recompute an event's counters and seat ledger from its confirmed bookings.

    availableSeats = totalSeats - confirmed tickets
    bookings       = number of confirmed bookings
    bookedSeats    = seats of confirmed bookings
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        lock_registry: EventLockRegistry,
        settings: Settings,
        metrics: BookingMetrics,
    ) -> None:
        self.uow = uow
        self.lock_registry = lock_registry
        self.settings = settings
        self.metrics = metrics
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        lock_registry: EventLockRegistry = Depends(Provide[Container.event_lock_registry]),
        settings: Settings = Depends(Provide[Container.config_service]),
        metrics: BookingMetrics = Depends(Provide[Container.booking_metrics]),
    ) -> Self:
        return cls(uow=uow, lock_registry=lock_registry, settings=settings, metrics=metrics)

    @Logger.io
    async def reconcile(self, *, event_id: str) -> ReconcileResult:
        with self.tracer.start_as_current_span(
            'use_case.reconcile_event_counters', attributes={'event.id': event_id}
        ):
            parsed_id = parse_uuid(event_id, message='Invalid event ID format')

            async with self.lock_registry.hold(key=str(parsed_id)):
                async with self.uow:
                    event = await self.uow.event_command_repo.get_by_id(event_id=parsed_id)
                    if not event:
                        raise NotFoundError('Event not found')

                    confirmed = await self.uow.booking_query_repo.list_confirmed_by_event(
                        event_id=parsed_id
                    )
                    tickets = confirmed_ticket_count(confirmed)
                    if tickets > event.total_seats:
                        Logger.base.warning(
                            f'⚠️ [RECONCILE] Event {parsed_id} oversold: '
                            f'{tickets} tickets confirmed for {event.total_seats} seats'
                        )
                    available_seats = max(event.total_seats - tickets, 0)
                    bookings = confirmed_booking_count(confirmed)

                    layout = event.seat_layout or SeatLayout.default(
                        rows=self.settings.DEFAULT_SEAT_ROWS,
                        seats_per_row=self.settings.DEFAULT_SEATS_PER_ROW,
                    )
                    layout = layout.with_booked_seats(build_booked_seat_ledger(confirmed))

                    await self.uow.event_command_repo.set_counters(
                        event_id=parsed_id, available_seats=available_seats, bookings=bookings
                    )
                    await self.uow.event_command_repo.save_seat_layout(
                        event_id=parsed_id, seat_layout=layout
                    )
                    await self.uow.commit()

        result = ReconcileResult(
            event_id=parsed_id,
            available_seats_before=event.available_seats,
            available_seats_after=available_seats,
            bookings_before=event.bookings,
            bookings_after=bookings,
            booked_seats=len(layout.booked_seats),
        )
        if result.drift_detected:
            self.metrics.record_ledger_repair(source='reconcile')
            Logger.base.warning(
                f'🔧 [RECONCILE] Event {parsed_id} counters corrected: '
                f'available {result.available_seats_before} -> {result.available_seats_after}, '
                f'bookings {result.bookings_before} -> {result.bookings_after}'
            )
        else:
            Logger.base.info(f'✅ [RECONCILE] Event {parsed_id} counters consistent')
        return result
