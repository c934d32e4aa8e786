from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
import uuid

from sqlalchemy import JSON, DateTime, Index, Integer, Numeric, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.booking.driven_adapter.model.event_model import EventModel
    from src.service.booking.driven_adapter.model.user_model import UserModel


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        Index('ix_booking_user_event', 'user_id', 'event_id'),
        Index('ix_booking_status', 'status'),
        Index('ix_booking_booking_date', 'booking_date'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    event_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    number_of_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    # [{row, seatNumber, seatId}]
    selected_seats: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='confirmed', nullable=False)
    payment_method: Mapped[str] = mapped_column(String(20), default='cash', nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    booking_reference: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    booking_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    user: Mapped['UserModel'] = relationship(
        'UserModel',
        primaryjoin='foreign(BookingModel.user_id) == UserModel.id',
        viewonly=True,
        lazy='selectin',
    )
    event: Mapped['EventModel'] = relationship(
        'EventModel',
        primaryjoin='foreign(BookingModel.event_id) == EventModel.id',
        viewonly=True,
        lazy='selectin',
    )
