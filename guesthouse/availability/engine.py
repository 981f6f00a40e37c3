"""Проверка доступности номеров и защита от двойного бронирования.

Все функции чистые: работают только со снимком бронирований, который
передал вызывающий код, ничего не изменяют и не ходят в сеть.
Гонку двух одновременных бронирований решает бэкенд, здесь только
оптимистичная проверка на клиенте.

Границы включительные: день выезда занят, и заехать в него нельзя.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from guesthouse.availability.exceptions import InvalidDateError
from guesthouse.availability.schemas import AvailabilityResult, Booking
from guesthouse.availability.utils import (
    DateLike,
    format_day,
    iter_days,
    to_calendar_day,
)
from guesthouse.config import settings


def _parse_range(
    start: DateLike,
    end: DateLike,
    strict: Optional[bool],
) -> Optional[Tuple[date, date]]:
    """Приводит границы к дням.

    В нестрогом режиме битая дата даёт None вместо исключения.
    """
    if strict is None:
        strict = settings.availability.STRICT_DATES
    try:
        return to_calendar_day(start), to_calendar_day(end)
    except InvalidDateError:
        if strict:
            raise
        return None


def _ranges_overlap(
    start_a: date,
    end_a: date,
    start_b: date,
    end_b: date,
) -> bool:
    return start_a <= end_b and start_b <= end_a


def date_ranges_overlap(
    start_a: DateLike,
    end_a: DateLike,
    start_b: DateLike,
    end_b: DateLike,
    *,
    strict: Optional[bool] = None,
) -> bool:
    """Проверяет пересечение двух закрытых диапазонов дат.

    Пересечение: start_a <= end_b и start_b <= end_a. Бронь по 18-е
    включительно блокирует заезд 18-го.

    Args:
        start_a: Начало первого диапазона.
        end_a: Конец первого диапазона.
        start_b: Начало второго диапазона.
        end_b: Конец второго диапазона.
        strict: Бросать InvalidDateError на битых датах. None - из
            настроек AVAILABILITY_STRICT_DATES. В нестрогом режиме битая
            дата означает отсутствие пересечения.

    Returns:
        True, если есть хотя бы один общий день.

    """
    range_a = _parse_range(start_a, end_a, strict)
    range_b = _parse_range(start_b, end_b, strict)
    if range_a is None or range_b is None:
        return False
    return _ranges_overlap(*range_a, *range_b)


def _occupying_bookings(
    bookings: Iterable[Booking],
    property_id: str,
    room_id: Optional[str] = None,
    exclude_booking_id: Optional[str] = None,
) -> List[Booking]:
    """Брони объекта (и номера), которые действительно занимают номера."""
    return [
        booking
        for booking in bookings
        if booking.property_id == property_id
        and (room_id is None or room_id in booking.room_ids)
        and booking.occupies_room
        and (exclude_booking_id is None or booking.id != exclude_booking_id)
    ]


def _overlapping_bookings(
    room_id: str,
    property_id: str,
    check_in: date,
    check_out: date,
    bookings: Iterable[Booking],
    exclude_booking_id: Optional[str],
) -> List[Booking]:
    return [
        booking
        for booking in _occupying_bookings(
            bookings,
            property_id,
            room_id=room_id,
            exclude_booking_id=exclude_booking_id,
        )
        if _ranges_overlap(
            check_in,
            check_out,
            booking.check_in,
            booking.check_out,
        )
    ]


def is_room_available(
    room_id: str,
    property_id: str,
    check_in: DateLike,
    check_out: DateLike,
    bookings: Iterable[Booking],
    exclude_booking_id: Optional[str] = None,
    *,
    strict: Optional[bool] = None,
) -> bool:
    """Проверяет, свободен ли номер на период.

    Учитываются только активные брони этого номера в этом объекте.
    exclude_booking_id исключает редактируемую бронь, чтобы она не
    конфликтовала сама с собой.
    """
    stay = _parse_range(check_in, check_out, strict)
    if stay is None:
        return True
    return not _overlapping_bookings(
        room_id,
        property_id,
        *stay,
        bookings,
        exclude_booking_id,
    )


def _collect_days(bookings: Iterable[Booking]) -> Set[str]:
    booked: Set[str] = set()
    for booking in bookings:
        booked.update(
            format_day(day)
            for day in iter_days(booking.check_in, booking.check_out)
        )
    return booked


def get_booked_dates_for_room(
    room_id: str,
    property_id: str,
    bookings: Iterable[Booking],
) -> Set[str]:
    """Возвращает занятые дни номера в формате YYYY-MM-DD.

    Каждый день от заезда до выезда включительно, без повторов.
    """
    return _collect_days(
        _occupying_bookings(bookings, property_id, room_id=room_id),
    )


def get_booked_dates_for_property(
    property_id: str,
    bookings: Iterable[Booking],
) -> Set[str]:
    """Возвращает занятые дни по всем номерам объекта."""
    return _collect_days(_occupying_bookings(bookings, property_id))


def validate_booking(
    room_ids: Sequence[str],
    property_id: str,
    check_in: DateLike,
    check_out: DateLike,
    bookings: Iterable[Booking],
    exclude_booking_id: Optional[str] = None,
    *,
    strict: Optional[bool] = None,
) -> AvailabilityResult:
    """Проверяет, что свободны все номера мультиномерной брони.

    Один занятый номер делает недействительной всю бронь. В результате
    перечислены только конфликтующие номера (в порядке запроса) и брони,
    из-за которых возник конфликт (без повторов).
    """
    stay = _parse_range(check_in, check_out, strict)
    if stay is None:
        return AvailabilityResult(is_valid=True)

    snapshot = list(bookings)
    conflicting_rooms: List[str] = []
    conflicting_bookings: Dict[str, Booking] = {}

    for room_id in dict.fromkeys(room_ids):
        overlapping = _overlapping_bookings(
            room_id,
            property_id,
            *stay,
            snapshot,
            exclude_booking_id,
        )
        if not overlapping:
            continue
        conflicting_rooms.append(room_id)
        for booking in overlapping:
            conflicting_bookings.setdefault(booking.id, booking)

    return AvailabilityResult(
        is_valid=not conflicting_rooms,
        conflicting_rooms=conflicting_rooms,
        conflicting_bookings=list(conflicting_bookings.values()),
    )
