"""Booking read models populated with event and user summaries."""

from datetime import datetime
from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.booking.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class EventSummary:
    id: UUID
    title: str
    date: datetime
    time: str = ''
    location: str = ''
    venue: str = ''
    image_url: Optional[str] = None
    category: Optional[str] = None


@attrs.define(frozen=True)
class UserSummary:
    id: UUID
    name: str
    email: str
    phone: str = ''


@attrs.define(frozen=True)
class BookingDetail:
    booking: Booking
    event: Optional[EventSummary] = None
    user: Optional[UserSummary] = None
