from typing import List

from fastapi import APIRouter, status

from guesthouse.availability.exceptions import handle_availability_exceptions
from guesthouse.availability.schemas import (
    AvailableRoomsRequest,
    BookedDatesRequest,
    BookedDatesResponse,
    BookingValidationRequest,
    BookingValidationResponse,
    CalendarMonth,
    CalendarRequest,
    OccupancyRequest,
    Room,
    RoomAvailabilityRequest,
    RoomAvailabilityResponse,
    RoomOccupancy,
)
from guesthouse.availability.services import (
    AvailabilityService,
    describe_conflicts,
)
from guesthouse.availability.validators import (
    validate_capacity,
    validate_property_matches,
    validate_reservation,
    validate_stay_range,
)
from guesthouse.common.logging import log_action
from guesthouse.common.responses import check_responses, query_responses


router = APIRouter()


@router.post(
    '/check',
    response_model=RoomAvailabilityResponse,
    status_code=status.HTTP_200_OK,
    summary='Проверка доступности номера',
    description='Проверяет, свободен ли номер на период по переданному '
    'снимку бронирований. Отменённые и истёкшие брони не учитываются.',
    responses=query_responses(),
)
@log_action('Проверка доступности номера.')
async def check_room(
    payload: RoomAvailabilityRequest,
) -> RoomAvailabilityResponse:
    """Проверяет один номер на период."""
    try:
        validate_stay_range(payload.check_in, payload.check_out)
        service = AvailabilityService(payload.bookings)
        available = service.is_room_available(
            payload.room_id,
            payload.property_id,
            payload.check_in,
            payload.check_out,
            payload.exclude_booking_id,
        )
        return RoomAvailabilityResponse(
            room_id=payload.room_id,
            available=available,
        )
    except Exception as e:
        handle_availability_exceptions(e, 'проверке номера')


@router.post(
    '/validate',
    response_model=BookingValidationResponse,
    status_code=status.HTTP_200_OK,
    summary='Проверка мультиномерного бронирования',
    description='Проверяет, что свободны все выбранные номера. '
    'Возвращает конфликтующие номера, брони и сообщения для гостя.',
    responses=query_responses(),
)
@log_action('Проверка бронирования на конфликты.')
async def validate_booking_request(
    payload: BookingValidationRequest,
) -> BookingValidationResponse:
    """Проверяет бронь из нескольких номеров, не бросая конфликт."""
    try:
        validate_stay_range(payload.check_in, payload.check_out)
        if payload.property is not None:
            validate_property_matches(payload.property, payload.property_id)
        service = AvailabilityService(payload.bookings)
        result = service.validate(
            payload.room_ids,
            payload.property_id,
            payload.check_in,
            payload.check_out,
            payload.exclude_booking_id,
        )
        return BookingValidationResponse(
            **result.model_dump(),
            messages=describe_conflicts(result, payload.property),
        )
    except Exception as e:
        handle_availability_exceptions(e, 'проверке бронирования')


@router.post(
    '/reserve-check',
    response_model=BookingValidationResponse,
    status_code=status.HTTP_200_OK,
    summary='Проверка перед отправкой бронирования',
    description='Та же проверка, что и /validate, но конфликт '
    'возвращается ошибкой 409. Используется формами создания и '
    'редактирования брони перед запросом к бэкенду.',
    responses=check_responses(),
)
@log_action('Проверка бронирования перед отправкой.')
async def reserve_check(
    payload: BookingValidationRequest,
) -> BookingValidationResponse:
    """Проверяет бронь и отвечает 409, если номера заняты."""
    try:
        service = AvailabilityService(payload.bookings)
        result = validate_reservation(service, payload)
        return BookingValidationResponse(**result.model_dump())
    except Exception as e:
        handle_availability_exceptions(e, 'проверке перед отправкой')


@router.post(
    '/booked-dates',
    response_model=BookedDatesResponse,
    status_code=status.HTTP_200_OK,
    summary='Занятые дни номера или объекта',
    description='Если room_id не задан, возвращает занятые дни по всем '
    'номерам объекта.',
    responses=query_responses(),
)
@log_action('Получение занятых дней.')
async def get_booked_dates(payload: BookedDatesRequest) -> BookedDatesResponse:
    """Возвращает отсортированные занятые дни."""
    try:
        service = AvailabilityService(payload.bookings)
        return BookedDatesResponse(
            property_id=payload.property_id,
            room_id=payload.room_id,
            dates=service.booked_dates(payload.property_id, payload.room_id),
        )
    except Exception as e:
        handle_availability_exceptions(e, 'получении занятых дней')


@router.post(
    '/rooms',
    response_model=List[Room],
    status_code=status.HTTP_200_OK,
    summary='Свободные номера объекта',
    description='Номера, открытые для бронирования и свободные на период. '
    'Если передано количество гостей, проверяется суммарная вместимость.',
    responses=query_responses(),
)
@log_action('Получение свободных номеров.')
async def get_available_rooms(payload: AvailableRoomsRequest) -> List[Room]:
    """Возвращает свободные номера объекта."""
    try:
        if payload.check_in is not None and payload.check_out is not None:
            validate_stay_range(payload.check_in, payload.check_out)
        service = AvailabilityService(payload.bookings)
        rooms = service.available_rooms(
            payload.property,
            payload.check_in,
            payload.check_out,
            payload.exclude_booking_id,
        )
        if payload.guests is not None:
            validate_capacity(rooms, payload.guests)
        return rooms
    except Exception as e:
        handle_availability_exceptions(e, 'получении свободных номеров')


@router.post(
    '/occupancy',
    response_model=List[RoomOccupancy],
    status_code=status.HTTP_200_OK,
    summary='Занятость номеров объекта',
    description='Занятые дни по каждому номеру объекта.',
    responses=query_responses(),
)
@log_action('Получение занятости номеров.')
async def get_occupancy(payload: OccupancyRequest) -> List[RoomOccupancy]:
    """Возвращает занятость каждого номера."""
    try:
        service = AvailabilityService(payload.bookings)
        return service.room_occupancy(payload.property)
    except Exception as e:
        handle_availability_exceptions(e, 'получении занятости')


@router.post(
    '/calendar',
    response_model=CalendarMonth,
    status_code=status.HTTP_200_OK,
    summary='Календарь занятости на месяц',
    responses=query_responses(),
)
@log_action('Построение календаря.')
async def get_calendar(payload: CalendarRequest) -> CalendarMonth:
    """Возвращает календарь на месяц для номера или объекта."""
    try:
        service = AvailabilityService(payload.bookings)
        return service.month_calendar(
            payload.property_id,
            payload.year,
            payload.month,
            room_id=payload.room_id,
            selected_check_in=payload.selected_check_in,
            selected_check_out=payload.selected_check_out,
            today=payload.today,
        )
    except Exception as e:
        handle_availability_exceptions(e, 'построении календаря')
