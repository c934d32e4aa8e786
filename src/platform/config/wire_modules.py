"""
Wire Modules Configuration

Modules whose `@inject` functions resolve `Provide[Container.x]` markers.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.booking.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    process_payment_use_case,
    reconcile_event_counters_use_case,
)
from src.service.booking.app.query import get_seat_availability_use_case
from src.service.booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    cancel_booking_use_case,
    process_payment_use_case,
    reconcile_event_counters_use_case,
    get_seat_availability_use_case,
    role_auth,
]
