"""
Integration fixtures: rows seeded straight into the test database.

Events and users are owned by other services, so tests insert them the way
those services would and then drive bookings through the HTTP API.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, Optional
import uuid

import pytest
from sqlalchemy import select
import uuid_utils

from src.service.booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.booking.driven_adapter.model import BookingModel, EventModel, UserModel
from test.conftest import run_db


@pytest.fixture
def seed_user() -> Callable[..., UserEntity]:
    def _seed(
        *,
        name: str = 'Jane Doe',
        email: Optional[str] = None,
        role: UserRole = UserRole.USER,
        phone: str = '555-0100',
    ) -> UserEntity:
        user = UserEntity(
            id=uuid_utils.uuid7(),
            email=email or f'{uuid.uuid4().hex[:8]}@example.com',
            name=name,
            phone=phone,
            role=role,
        )

        async def _insert(session: Any) -> None:
            session.add(
                UserModel(
                    id=uuid.UUID(str(user.id)),
                    email=user.email,
                    name=user.name,
                    phone=user.phone,
                    role=user.role.value,
                    is_active=True,
                )
            )

        run_db(_insert)
        return user

    return _seed


@pytest.fixture
def seed_event() -> Callable[..., str]:
    def _seed(
        *,
        total_seats: int = 100,
        available_seats: Optional[int] = None,
        bookings: int = 0,
        price: str = '25.00',
        date: Optional[datetime] = None,
        seat_layout: Optional[Dict[str, Any]] = None,
    ) -> str:
        event_id = uuid.UUID(str(uuid_utils.uuid7()))

        async def _insert(session: Any) -> None:
            session.add(
                EventModel(
                    id=event_id,
                    title='Jazz Night',
                    description='An evening of live jazz',
                    category='music',
                    date=date or datetime.now(timezone.utc) + timedelta(days=30),
                    time='19:30',
                    location='Downtown',
                    venue='Blue Note Hall',
                    price=Decimal(price),
                    total_seats=total_seats,
                    available_seats=total_seats if available_seats is None else available_seats,
                    bookings=bookings,
                    seat_layout=seat_layout,
                )
            )

        run_db(_insert)
        return str(event_id)

    return _seed


@pytest.fixture
def load_event() -> Callable[[str], EventModel]:
    def _load(event_id: str) -> EventModel:
        async def _select(session: Any) -> EventModel:
            result = await session.execute(
                select(EventModel).where(EventModel.id == uuid.UUID(event_id))
            )
            return result.scalar_one()

        return run_db(_select)

    return _load


@pytest.fixture
def load_booking() -> Callable[[str], BookingModel]:
    def _load(booking_id: str) -> BookingModel:
        async def _select(session: Any) -> BookingModel:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == uuid.UUID(booking_id))
            )
            return result.scalar_one()

        return run_db(_select)

    return _load
