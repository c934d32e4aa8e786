"""Conversions between ORM rows / JSON columns and domain objects."""

from typing import Any, Dict, List, Optional

from src.platform.types.datetime_utils import as_utc
from src.platform.types.uuid7_utils_types import from_std_uuid
from src.service.booking.app.dto.booking_detail_dto import (
    BookingDetail,
    EventSummary,
    UserSummary,
)
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.event_entity import EventEntity
from src.service.booking.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.booking.domain.enum.event_status import EventStatus
from src.service.booking.domain.enum.seat_layout_type import SeatLayoutType
from src.service.booking.domain.value_object.seat import BookedSeat, SeatLayout, SelectedSeat
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.model.event_model import EventModel


def seat_layout_from_json(data: Optional[Dict[str, Any]]) -> Optional[SeatLayout]:
    if not data:
        return None
    return SeatLayout(
        rows=int(data.get('rows', 0)),
        seats_per_row=int(data.get('seatsPerRow', 0)),
        layout=SeatLayoutType(data.get('layout') or SeatLayoutType.STANDARD),
        booked_seats=[
            BookedSeat(row=str(item['row']), seat=int(item['seat']))
            for item in data.get('bookedSeats') or []
        ],
        seat_categories=dict(data.get('seatCategories') or {}),
    )


def seat_layout_to_json(layout: SeatLayout) -> Dict[str, Any]:
    return {
        'rows': layout.rows,
        'seatsPerRow': layout.seats_per_row,
        'layout': layout.layout.value,
        'bookedSeats': [{'row': seat.row, 'seat': seat.seat} for seat in layout.booked_seats],
        'seatCategories': layout.seat_categories,
    }


def selected_seats_from_json(data: Optional[List[Dict[str, Any]]]) -> List[SelectedSeat]:
    return [
        SelectedSeat(row=str(item['row']), seat_number=int(item['seatNumber']))
        for item in data or []
    ]


def selected_seats_to_json(seats: List[SelectedSeat]) -> List[Dict[str, Any]]:
    return [
        {'row': seat.row, 'seatNumber': seat.seat_number, 'seatId': seat.seat_id}
        for seat in seats
    ]


def booking_to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=from_std_uuid(db_booking.id),  # stdlib uuid.UUID -> uuid_utils.UUID
        user_id=from_std_uuid(db_booking.user_id),
        event_id=from_std_uuid(db_booking.event_id),
        number_of_tickets=db_booking.number_of_tickets,
        total_price=db_booking.total_price,
        booking_reference=db_booking.booking_reference,
        selected_seats=selected_seats_from_json(db_booking.selected_seats),
        status=BookingStatus(db_booking.status),
        payment_method=PaymentMethod(db_booking.payment_method),
        payment_status=PaymentStatus(db_booking.payment_status),
        booking_date=as_utc(db_booking.booking_date),
        created_at=as_utc(db_booking.created_at) if db_booking.created_at else None,
        updated_at=as_utc(db_booking.updated_at) if db_booking.updated_at else None,
    )


def event_to_entity(db_event: EventModel) -> EventEntity:
    return EventEntity(
        id=from_std_uuid(db_event.id),
        title=db_event.title,
        date=as_utc(db_event.date),
        price=db_event.price,
        total_seats=db_event.total_seats,
        available_seats=db_event.available_seats,
        bookings=db_event.bookings,
        time=db_event.time,
        location=db_event.location,
        venue=db_event.venue,
        image_url=db_event.image_url,
        category=db_event.category,
        seat_layout=seat_layout_from_json(db_event.seat_layout),
        status=EventStatus(db_event.status),
    )


def booking_to_detail(db_booking: BookingModel, *, include_phone: bool = False) -> BookingDetail:
    event_summary = None
    if db_booking.event is not None:
        event_summary = EventSummary(
            id=from_std_uuid(db_booking.event.id),
            title=db_booking.event.title,
            date=as_utc(db_booking.event.date),
            time=db_booking.event.time,
            location=db_booking.event.location,
            venue=db_booking.event.venue,
            image_url=db_booking.event.image_url,
            category=db_booking.event.category,
        )

    user_summary = None
    if db_booking.user is not None:
        user_summary = UserSummary(
            id=from_std_uuid(db_booking.user.id),
            name=db_booking.user.name,
            email=db_booking.user.email,
            phone=db_booking.user.phone if include_phone else '',
        )

    return BookingDetail(
        booking=booking_to_entity(db_booking), event=event_summary, user=user_summary
    )
