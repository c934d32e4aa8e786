from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.booking.app.command.process_payment_use_case import ProcessPaymentUseCase
from src.service.booking.app.command.reconcile_event_counters_use_case import (
    ReconcileEventCountersUseCase,
)
from src.service.booking.app.command.update_payment_status_use_case import (
    UpdatePaymentStatusUseCase,
)
from src.service.booking.app.dto.create_booking_dto import CreateBookingCommand
from src.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.booking.domain.entity.user_entity import UserEntity
from src.service.booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    ApiResponse,
    BookingCreateRequest,
    BookingResponse,
    PaymentStatusUpdateRequest,
    ProcessPaymentRequest,
    ReconcileResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)

# Static paths are registered before '/{booking_id}' so they are not captured by it


@router.post(
    '',
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[BookingResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> ApiResponse[BookingResponse]:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('user.id', str(current_user.id))
        span.set_attribute('booking.number_of_tickets', request.number_of_tickets or 0)

        detail = await use_case.create_booking(
            user=current_user,
            command=CreateBookingCommand(
                event_id=request.event_id,
                number_of_tickets=request.number_of_tickets,
                payment_method=request.payment_method,
                selected_seats=[seat.to_value_object() for seat in request.selected_seats],
                payment_details=(
                    request.payment_details.to_value_object() if request.payment_details else None
                ),
            ),
        )

        span.set_attribute('booking.id', str(detail.booking.id))
        return ApiResponse(
            message='Booking created successfully', data=BookingResponse.from_detail(detail)
        )


@router.post(
    '/payment', response_model=ApiResponse[BookingResponse], response_model_exclude_none=True
)
@Logger.io
async def process_payment(
    request: ProcessPaymentRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ProcessPaymentUseCase = Depends(ProcessPaymentUseCase.depends),
) -> ApiResponse[BookingResponse]:
    detail = await use_case.process_payment(
        booking_id=request.booking_id,
        payment_details=(
            request.payment_details.to_value_object() if request.payment_details else None
        ),
        user=current_user,
    )
    return ApiResponse(
        message='Payment processed successfully', data=BookingResponse.from_detail(detail)
    )


@router.get(
    '/my-bookings',
    response_model=ApiResponse[List[BookingResponse]],
    response_model_exclude_none=True,
)
@Logger.io
async def list_my_bookings(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> ApiResponse[List[BookingResponse]]:
    details = await use_case.list_user_bookings(user=current_user)
    return ApiResponse(
        count=len(details), data=[BookingResponse.from_detail(detail) for detail in details]
    )


@router.get(
    '/admin/all',
    response_model=ApiResponse[List[BookingResponse]],
    response_model_exclude_none=True,
)
@Logger.io
async def list_all_bookings(
    current_user: UserEntity = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> ApiResponse[List[BookingResponse]]:
    details = await use_case.list_all_bookings()
    return ApiResponse(
        count=len(details), data=[BookingResponse.from_detail(detail) for detail in details]
    )


@router.get(
    '/event/{event_id}',
    response_model=ApiResponse[List[BookingResponse]],
    response_model_exclude_none=True,
)
@Logger.io
async def list_event_bookings(
    event_id: str,
    current_user: UserEntity = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> ApiResponse[List[BookingResponse]]:
    details = await use_case.list_event_bookings(event_id=event_id)
    return ApiResponse(
        count=len(details), data=[BookingResponse.from_detail(detail) for detail in details]
    )


@router.post(
    '/admin/reconcile/{event_id}',
    response_model=ApiResponse[ReconcileResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def reconcile_event_counters(
    event_id: str,
    current_user: UserEntity = Depends(require_admin),
    use_case: ReconcileEventCountersUseCase = Depends(ReconcileEventCountersUseCase.depends),
) -> ApiResponse[ReconcileResponse]:
    result = await use_case.reconcile(event_id=event_id)
    return ApiResponse(
        message=(
            'Event counters reconciled' if result.drift_detected else 'Event counters consistent'
        ),
        data=ReconcileResponse.from_dto(result),
    )


@router.get(
    '/{booking_id}', response_model=ApiResponse[BookingResponse], response_model_exclude_none=True
)
@Logger.io
async def get_booking(
    booking_id: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> ApiResponse[BookingResponse]:
    detail = await use_case.get_booking(booking_id=booking_id, user=current_user)
    return ApiResponse(data=BookingResponse.from_detail(detail))


@router.put(
    '/{booking_id}/cancel',
    response_model=ApiResponse[BookingResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def cancel_booking(
    booking_id: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> ApiResponse[BookingResponse]:
    detail = await use_case.cancel_booking(booking_id=booking_id, user=current_user)
    return ApiResponse(
        message='Booking cancelled successfully', data=BookingResponse.from_detail(detail)
    )


@router.put(
    '/{booking_id}/payment',
    response_model=ApiResponse[BookingResponse],
    response_model_exclude_none=True,
)
@Logger.io
async def update_payment_status(
    booking_id: str,
    request: PaymentStatusUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdatePaymentStatusUseCase = Depends(UpdatePaymentStatusUseCase.depends),
) -> ApiResponse[BookingResponse]:
    detail = await use_case.update_payment_status(
        booking_id=booking_id, payment_status=request.payment_status
    )
    return ApiResponse(
        message='Payment status updated successfully', data=BookingResponse.from_detail(detail)
    )
