"""Booking confirmation email content shared by every email backend."""

from html import escape

import attrs

from src.service.booking.app.dto.booking_detail_dto import BookingDetail


@attrs.define(frozen=True)
class RenderedEmail:
    subject: str
    text: str
    html: str


def _seats_line(detail: BookingDetail) -> tuple[str, str]:
    booking = detail.booking
    if booking.selected_seats:
        return 'Selected Seats', ', '.join(seat.label for seat in booking.selected_seats)
    return 'Tickets', f'{booking.number_of_tickets} ticket(s)'


def render_booking_confirmation(*, user_name: str, detail: BookingDetail) -> RenderedEmail:
    booking = detail.booking
    event = detail.event
    title = event.title if event else 'your event'
    event_date = event.date.strftime('%A, %B %d, %Y') if event else ''
    event_time = (event.time if event else '') or '18:00'
    venue = ', '.join(part for part in ((event.venue, event.location) if event else ()) if part)
    seats_label, seats_value = _seats_line(detail)

    rows = [
        ('Booking Reference', booking.booking_reference),
        ('Event', title),
        ('Date', event_date),
        ('Time', event_time),
        ('Venue', venue),
        (seats_label, seats_value),
        ('Total Amount', f'{booking.total_price:.2f}'),
        ('Payment Status', booking.payment_status.value),
    ]

    text = '\n'.join(
        [
            f'Hello {user_name},',
            '',
            'Your booking is confirmed!',
            '',
            *(f'{label}: {value}' for label, value in rows if value),
            '',
            'Please show your booking reference at the venue.',
        ]
    )
    html_rows = ''.join(
        f'<p><strong>{escape(label)}:</strong> {escape(str(value))}</p>'
        for label, value in rows
        if value
    )
    html = (
        '<!DOCTYPE html><html><body style="font-family: Arial, sans-serif; color: #333;">'
        f'<h2>Booking Confirmed</h2><p>Hello {escape(user_name)},</p>'
        f'<div style="border-left: 4px solid #a855f7; padding: 12px;">{html_rows}</div>'
        '<p>Please show your booking reference at the venue.</p>'
        '</body></html>'
    )
    return RenderedEmail(subject=f'Booking Confirmed - {title}', text=text, html=html)
