"""Преобразование ответов бэкенда в снимок бронирований."""

from typing import Any, Iterable, List, Mapping, Optional

from guesthouse.availability.constants import BookingStatus
from guesthouse.availability.schemas import Booking


def _as_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _room_id(room: Mapping[str, Any]) -> Optional[str]:
    """Позиция брони содержит roomId, гостевой ответ - иногда только id."""
    return _as_str(room.get('roomId', room.get('id')))


def transform_booking_from_backend(payload: Mapping[str, Any]) -> Booking:
    """Преобразует BookingAdminResponse или BookingGuestResponse в Booking.

    Для админского ответа идентификатор - bookingId, для гостевого -
    token. Поля валидируются моделью Booking: без идентификатора,
    объекта или дат бросается ValidationError, а не KeyError.
    """
    booking_id = payload.get('bookingId') or payload.get('token')
    property_info = payload.get('property') or {}
    property_id = property_info.get('id')
    rooms = payload.get('rooms') or []

    return Booking(
        id=_as_str(booking_id),
        reference_id=payload.get('referenceId'),
        property_id=_as_str(property_id),
        room_ids=tuple(_room_id(room) for room in rooms),
        check_in=payload.get('checkInDate'),
        check_out=payload.get('checkOutDate'),
        status=payload.get('status') or BookingStatus.PENDING,
    )


def transform_bookings_from_backend(
    payloads: Iterable[Mapping[str, Any]],
) -> List[Booking]:
    """Преобразует список ответов бэкенда."""
    return [transform_booking_from_backend(payload) for payload in payloads]
