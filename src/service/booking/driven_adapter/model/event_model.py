from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid

from sqlalchemy import JSON, DateTime, Integer, Numeric, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class EventModel(Base):
    """
    Event catalog row. Catalog columns are maintained by event management,
    this service only updates available_seats, bookings and seat_layout.
    """

    __tablename__ = 'event'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String, default='', nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    time: Mapped[str] = mapped_column(String(20), default='', nullable=False)
    location: Mapped[str] = mapped_column(String(255), default='', nullable=False)
    venue: Mapped[str] = mapped_column(String(255), default='', nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    bookings: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # {rows, seatsPerRow, layout, bookedSeats: [{row, seat}], seatCategories}
    seat_layout: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default='upcoming', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
