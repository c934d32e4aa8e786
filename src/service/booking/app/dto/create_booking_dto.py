from typing import List, Optional

import attrs

from src.service.booking.domain.value_object.card_details import CardDetails
from src.service.booking.domain.value_object.seat import SelectedSeat


@attrs.define(frozen=True)
class CreateBookingCommand:
    """
    Raw booking request as received from the client.

    Fields stay optional so the use case can report each missing piece with
    its own message.
    """

    event_id: Optional[str]
    number_of_tickets: Optional[int]
    payment_method: Optional[str] = None
    selected_seats: List[SelectedSeat] = attrs.field(factory=list)
    payment_details: Optional[CardDetails] = None
