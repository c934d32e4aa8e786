from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.query.get_seat_availability_use_case import (
    GetSeatAvailabilityUseCase,
)
from src.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    ApiResponse,
    SeatAvailabilityResponse,
)


router = APIRouter()


@router.get(
    '/{event_id}/seats',
    response_model=ApiResponse[SeatAvailabilityResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def get_seat_availability(
    event_id: str,
    use_case: GetSeatAvailabilityUseCase = Depends(GetSeatAvailabilityUseCase.depends),
) -> ApiResponse[SeatAvailabilityResponse]:
    availability = await use_case.get_seat_availability(event_id=event_id)
    return ApiResponse(data=SeatAvailabilityResponse.from_dto(availability))
