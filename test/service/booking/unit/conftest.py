"""
Unit test configuration for the booking service.

Use cases run against the in-memory unit of work; collaborators outside the
transaction (notification, metrics) are mocks.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.config.core_setting import Settings
from src.platform.metrics.booking_metrics import BookingMetrics
from src.platform.state.event_lock import EventLockRegistry
from src.service.booking.app.interface.i_notification_service import INotificationService
from test.service.booking.fake_unit_of_work import FakeUnitOfWork, InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow(store: InMemoryStore) -> FakeUnitOfWork:
    return FakeUnitOfWork(store)


@pytest.fixture
def lock_registry() -> EventLockRegistry:
    return EventLockRegistry()


@pytest.fixture
def notification_service() -> AsyncMock:
    return AsyncMock(spec=INotificationService)


@pytest.fixture
def metrics() -> MagicMock:
    return MagicMock(spec=BookingMetrics)


@pytest.fixture
def settings() -> Settings:
    return Settings(MAX_TICKETS_PER_BOOKING=10, DEFAULT_SEAT_ROWS=10, DEFAULT_SEATS_PER_ROW=12)
