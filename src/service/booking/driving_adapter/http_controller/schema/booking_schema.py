from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.service.booking.app.dto.booking_detail_dto import (
    BookingDetail,
    EventSummary,
    UserSummary,
)
from src.service.booking.app.dto.seat_availability_dto import ReconcileResult, SeatAvailability
from src.service.booking.domain.value_object.card_details import CardDetails
from src.service.booking.domain.value_object.seat import SeatLayout, SelectedSeat


T = TypeVar('T')


class CamelModel(BaseModel):
    """JSON keys are camelCase, Python attributes snake_case; both accepted on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    count: Optional[int] = None
    data: Optional[T] = None


# ---------------------------------------------------------------- requests


class SelectedSeatRequest(CamelModel):
    row: str = Field(min_length=1)
    seat_number: int

    def to_value_object(self) -> SelectedSeat:
        return SelectedSeat(row=self.row, seat_number=self.seat_number)


class PaymentDetailsRequest(CamelModel):
    card_number: Optional[str] = None
    card_holder: Optional[str] = None
    expiry_date: Optional[str] = None
    cvv: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'cardNumber': '4111 1111 1111 1111',
                'cardHolder': 'Jane Doe',
                'expiryDate': '12/28',
                'cvv': '123',
            }
        }
    )

    def to_value_object(self) -> CardDetails:
        return CardDetails(
            card_number=self.card_number,
            card_holder=self.card_holder,
            expiry_date=self.expiry_date,
            cvv=self.cvv,
        )


class BookingCreateRequest(CamelModel):
    # Optional so missing fields reach the use case and get its own message
    event_id: Optional[str] = None
    number_of_tickets: Optional[int] = None
    payment_method: Optional[str] = None
    selected_seats: List[SelectedSeatRequest] = []
    payment_details: Optional[PaymentDetailsRequest] = None

    model_config = ConfigDict(
        json_schema_extra={
            'examples': [
                {
                    'eventId': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                    'numberOfTickets': 2,
                    'selectedSeats': [
                        {'row': 'A', 'seatNumber': 1},
                        {'row': 'A', 'seatNumber': 2},
                    ],
                },
                {'eventId': '01936d8f-5e73-7c4e-a9c5-123456789abc', 'numberOfTickets': 3},
            ]
        }
    )


class ProcessPaymentRequest(CamelModel):
    booking_id: Optional[str] = None
    payment_details: Optional[PaymentDetailsRequest] = None


class PaymentStatusUpdateRequest(CamelModel):
    payment_status: Optional[str] = None

    model_config = ConfigDict(json_schema_extra={'example': {'paymentStatus': 'paid'}})


# --------------------------------------------------------------- responses


class SelectedSeatResponse(CamelModel):
    row: str
    seat_number: int
    seat_id: str


class EventSummaryResponse(CamelModel):
    id: str
    title: str
    date: datetime
    time: str = ''
    location: str = ''
    venue: str = ''
    image_url: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_dto(cls, event: EventSummary) -> 'EventSummaryResponse':
        return cls(
            id=str(event.id),
            title=event.title,
            date=event.date,
            time=event.time,
            location=event.location,
            venue=event.venue,
            image_url=event.image_url,
            category=event.category,
        )


class UserSummaryResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None

    @classmethod
    def from_dto(cls, user: UserSummary) -> 'UserSummaryResponse':
        return cls(id=str(user.id), name=user.name, email=user.email, phone=user.phone or None)


class BookingResponse(CamelModel):
    id: str
    booking_reference: str
    event_id: str
    user_id: str
    number_of_tickets: int
    selected_seats: List[SelectedSeatResponse]
    total_price: float
    status: str
    payment_method: str
    payment_status: str
    booking_date: Optional[datetime] = None
    is_active: bool
    event: Optional[EventSummaryResponse] = None
    user: Optional[UserSummaryResponse] = None

    @classmethod
    def from_detail(cls, detail: BookingDetail) -> 'BookingResponse':
        booking = detail.booking
        return cls(
            id=str(booking.id),
            booking_reference=booking.booking_reference,
            event_id=str(booking.event_id),
            user_id=str(booking.user_id),
            number_of_tickets=booking.number_of_tickets,
            selected_seats=[
                SelectedSeatResponse(
                    row=seat.row, seat_number=seat.seat_number, seat_id=seat.seat_id
                )
                for seat in booking.selected_seats
            ],
            total_price=float(booking.total_price),
            status=booking.status.value,
            payment_method=booking.payment_method.value,
            payment_status=booking.payment_status.value,
            booking_date=booking.booking_date,
            is_active=booking.is_active,
            event=EventSummaryResponse.from_dto(detail.event) if detail.event else None,
            user=UserSummaryResponse.from_dto(detail.user) if detail.user else None,
        )


class BookedSeatResponse(CamelModel):
    row: str
    seat: int


class SeatLayoutResponse(CamelModel):
    rows: int
    seats_per_row: int
    layout: str
    booked_seats: List[BookedSeatResponse]
    seat_categories: Dict[str, Any] = {}

    @classmethod
    def from_value_object(cls, layout: SeatLayout) -> 'SeatLayoutResponse':
        return cls(
            rows=layout.rows,
            seats_per_row=layout.seats_per_row,
            layout=layout.layout.value,
            booked_seats=[BookedSeatResponse(row=s.row, seat=s.seat) for s in layout.booked_seats],
            seat_categories=dict(layout.seat_categories),
        )


class SeatAvailabilityResponse(CamelModel):
    seat_layout: SeatLayoutResponse
    available_seats: int
    total_seats: int

    @classmethod
    def from_dto(cls, availability: SeatAvailability) -> 'SeatAvailabilityResponse':
        return cls(
            seat_layout=SeatLayoutResponse.from_value_object(availability.seat_layout),
            available_seats=availability.available_seats,
            total_seats=availability.total_seats,
        )


class ReconcileResponse(CamelModel):
    event_id: str
    available_seats_before: int
    available_seats_after: int
    bookings_before: int
    bookings_after: int
    booked_seats: int
    drift_detected: bool

    @classmethod
    def from_dto(cls, result: ReconcileResult) -> 'ReconcileResponse':
        return cls(
            event_id=str(result.event_id),
            available_seats_before=result.available_seats_before,
            available_seats_after=result.available_seats_after,
            bookings_before=result.bookings_before,
            bookings_after=result.bookings_after,
            booked_seats=result.booked_seats,
            drift_detected=result.drift_detected,
        )
