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
from src.service.booking.app.dto.seat_availability_dto import SeatAvailability
from src.service.booking.domain.seat_occupancy_domain import build_booked_seat_ledger
from src.service.booking.domain.value_object.seat import SeatLayout


class GetSeatAvailabilityUseCase:
    """
    Occupied seats of an event, rebuilt from its confirmed bookings.

    Read-with-repair: an event without a layout gets the default one, and a
    cached ledger that drifted from the confirmed bookings is overwritten.
    The event row is only written when one of the two actually changed.
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
    async def get_seat_availability(self, *, event_id: str) -> SeatAvailability:
        with self.tracer.start_as_current_span(
            'use_case.get_seat_availability', attributes={'event.id': event_id}
        ):
            parsed_id = parse_uuid(event_id, message='Invalid event ID format')

            async with self.lock_registry.hold(key=str(parsed_id)):
                async with self.uow:
                    event = await self.uow.event_command_repo.get_by_id(event_id=parsed_id)
                    if not event:
                        raise NotFoundError('Event not found')

                    layout = event.seat_layout
                    initialized = layout is None
                    if layout is None:
                        layout = SeatLayout.default(
                            rows=self.settings.DEFAULT_SEAT_ROWS,
                            seats_per_row=self.settings.DEFAULT_SEATS_PER_ROW,
                        )

                    confirmed = await self.uow.booking_query_repo.list_confirmed_by_event(
                        event_id=parsed_id
                    )
                    ledger = build_booked_seat_ledger(confirmed)
                    repaired = ledger != layout.booked_seats
                    layout = layout.with_booked_seats(ledger)

                    if initialized or repaired:
                        await self.uow.event_command_repo.save_seat_layout(
                            event_id=parsed_id, seat_layout=layout
                        )
                        await self.uow.commit()

        if repaired:
            self.metrics.record_ledger_repair(source='availability')
            Logger.base.info(
                f'🪑 [SEATS] Ledger of event {parsed_id} rebuilt: {len(ledger)} seat(s) booked'
            )

        return SeatAvailability(
            seat_layout=layout,
            available_seats=event.available_seats,
            total_seats=event.total_seats,
        )
