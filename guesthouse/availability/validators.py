from datetime import date
from typing import List, Sequence

from guesthouse.availability.schemas import (
    AvailabilityResult,
    BookingValidationRequest,
    Property,
    Room,
)
from guesthouse.availability.services import AvailabilityService
from guesthouse.common.exceptions import (
    BadRequestException,
    ValidationErrorException,
)


def validate_rooms_selected(room_ids: Sequence[str]) -> None:
    """Проверяет, что выбран хотя бы один номер."""
    if not room_ids:
        raise ValidationErrorException(
            'Необходимо выбрать хотя бы один номер.',
        )


def validate_stay_range(check_in: date, check_out: date) -> None:
    """Проверяет, что дата выезда не раньше даты заезда."""
    if check_out < check_in:
        raise BadRequestException(
            f'Дата выезда {check_out.isoformat()} раньше даты заезда '
            f'{check_in.isoformat()}.',
        )


def validate_rooms_belong_to_property(
    property: Property,
    room_ids: Sequence[str],
) -> List[Room]:
    """Проверяет, что номера принадлежат объекту.

    Возвращает найденные номера в порядке room_ids, каждый один раз.
    """
    unique_ids = list(dict.fromkeys(room_ids))
    rooms_by_id = {room.id: room for room in property.rooms}
    missing = [room_id for room_id in unique_ids if room_id not in rooms_by_id]
    if missing:
        raise ValidationErrorException(
            f'Номера с ID: {", ".join(missing)} не найдены в объекте '
            f'{property.id}.',
            details={'missingRooms': missing},
        )
    return [rooms_by_id[room_id] for room_id in unique_ids]


def validate_capacity(rooms: Sequence[Room], guests: int) -> None:
    """Проверяет, что суммарная вместимость номеров >= количества гостей."""
    # повторно выбранный номер не добавляет мест
    unique_rooms = {room.id: room for room in rooms}
    if not unique_rooms:
        return

    total = sum(room.capacity for room in unique_rooms.values())
    if guests > total:
        raise ValidationErrorException(
            f'Максимальная вместимость выбранных номеров - {total} гостей. '
            'Выберите больше номеров или уменьшите количество гостей.',
        )


def validate_property_matches(property: Property, property_id: str) -> None:
    """Проверяет, что переданный объект совпадает с property_id запроса."""
    if property.id != property_id:
        raise ValidationErrorException(
            f'Объект {property.id} не совпадает с объектом брони '
            f'{property_id}.',
            details={'propertyId': property_id, 'property': property.id},
        )


def validate_reservation(
    service: AvailabilityService,
    payload: BookingValidationRequest,
) -> AvailabilityResult:
    """Полная проверка брони перед отправкой на бэкенд.

    Порядок: выбраны номера, корректный период, объект совпадает с
    property_id, номера принадлежат объекту и вмещают гостей (если
    передан объект), номера свободны.
    Конфликт бросает BookingConflictException.
    """
    validate_rooms_selected(payload.room_ids)
    validate_stay_range(payload.check_in, payload.check_out)

    if payload.property is not None:
        validate_property_matches(payload.property, payload.property_id)
        rooms = validate_rooms_belong_to_property(
            payload.property,
            payload.room_ids,
        )
        if payload.guests is not None:
            validate_capacity(rooms, payload.guests)

    return service.check_booking(
        payload.room_ids,
        payload.property_id,
        payload.check_in,
        payload.check_out,
        payload.exclude_booking_id,
        property=payload.property,
    )
