import calendar
from datetime import date
import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from guesthouse.availability.engine import (
    get_booked_dates_for_property,
    get_booked_dates_for_room,
    is_room_available,
    validate_booking,
)
from guesthouse.availability.exceptions import BookingConflictException
from guesthouse.availability.schemas import (
    AvailabilityResult,
    Booking,
    CalendarDay,
    CalendarMonth,
    Property,
    Room,
    RoomOccupancy,
)
from guesthouse.availability.utils import DateLike, format_day
from guesthouse.config import DAYS_IN_WEEK, settings


logger = logging.getLogger('app')


class AvailabilityService:
    """Запросы доступности поверх одного снимка бронирований.

    Снимок копируется при создании сервиса, поэтому последующие
    изменения исходного списка на результаты не влияют.
    """

    def __init__(self, bookings: Iterable[Booking]) -> None:
        """Инициализация сервиса со снимком бронирований."""
        self.bookings: Sequence[Booking] = tuple(bookings)

    def is_room_available(
        self,
        room_id: str,
        property_id: str,
        check_in: DateLike,
        check_out: DateLike,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        """Свободен ли номер на период по снимку сервиса."""
        return is_room_available(
            room_id,
            property_id,
            check_in,
            check_out,
            self.bookings,
            exclude_booking_id,
        )

    def available_rooms(
        self,
        property: Property,
        check_in: Optional[DateLike] = None,
        check_out: Optional[DateLike] = None,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Room]:
        """Номера объекта, которые можно предложить гостю.

        Закрытые администратором номера не предлагаются никогда.
        Если даты не выбраны, возвращаются все открытые номера.
        """
        rooms = [room for room in property.rooms if room.is_available]
        if check_in is None or check_out is None:
            return rooms

        return [
            room
            for room in rooms
            if self.is_room_available(
                room.id,
                property.id,
                check_in,
                check_out,
                exclude_booking_id,
            )
        ]

    def room_occupancy(self, property: Property) -> List[RoomOccupancy]:
        """Занятые дни каждого номера объекта для календаря администратора."""
        return [
            RoomOccupancy(
                room_id=room.id,
                room_number=room.room_number,
                booked_dates=sorted(
                    get_booked_dates_for_room(
                        room.id,
                        property.id,
                        self.bookings,
                    ),
                ),
            )
            for room in property.rooms
        ]

    def booked_dates(
        self,
        property_id: str,
        room_id: Optional[str] = None,
    ) -> List[str]:
        """Отсортированные занятые дни номера или всего объекта."""
        if room_id:
            booked = get_booked_dates_for_room(
                room_id,
                property_id,
                self.bookings,
            )
        else:
            booked = get_booked_dates_for_property(property_id, self.bookings)
        return sorted(booked)

    def month_calendar(
        self,
        property_id: str,
        year: int,
        month: int,
        room_id: Optional[str] = None,
        selected_check_in: Optional[date] = None,
        selected_check_out: Optional[date] = None,
        today: Optional[date] = None,
    ) -> CalendarMonth:
        """Строит календарь на месяц с отметками занятых и выбранных дней.

        Занятые и прошедшие дни недоступны для выбора. Дни строго между
        выбранными заездом и выездом отмечаются как in_range.
        """
        today = today or date.today()
        booked = set(self.booked_dates(property_id, room_id))

        first_day = date(year, month, 1)
        if settings.availability.WEEK_STARTS_ON_SUNDAY:
            leading_blanks = (first_day.weekday() + 1) % DAYS_IN_WEEK
        else:
            leading_blanks = first_day.weekday()

        days: List[CalendarDay] = []
        for number in range(1, calendar.monthrange(year, month)[1] + 1):
            day = date(year, month, number)
            is_booked = format_day(day) in booked
            is_past = day < today
            days.append(
                CalendarDay(
                    day=day,
                    booked=is_booked,
                    past=is_past,
                    selected=day in (selected_check_in, selected_check_out),
                    in_range=bool(
                        selected_check_in
                        and selected_check_out
                        and selected_check_in < day < selected_check_out,
                    ),
                    selectable=not is_past and not is_booked,
                ),
            )

        return CalendarMonth(
            year=year,
            month=month,
            leading_blanks=leading_blanks,
            days=days,
        )

    def validate(
        self,
        room_ids: Sequence[str],
        property_id: str,
        check_in: DateLike,
        check_out: DateLike,
        exclude_booking_id: Optional[str] = None,
    ) -> AvailabilityResult:
        """Проверка мультиномерной брони по снимку сервиса."""
        return validate_booking(
            room_ids,
            property_id,
            check_in,
            check_out,
            self.bookings,
            exclude_booking_id,
        )

    def check_booking(
        self,
        room_ids: Sequence[str],
        property_id: str,
        check_in: DateLike,
        check_out: DateLike,
        exclude_booking_id: Optional[str] = None,
        property: Optional[Property] = None,
    ) -> AvailabilityResult:
        """Проверяет бронь и бросает BookingConflictException при конфликте."""
        result = self.validate(
            room_ids,
            property_id,
            check_in,
            check_out,
            exclude_booking_id,
        )
        if result.is_valid:
            return result

        messages = describe_conflicts(result, property)
        logger.warning(
            'Конфликт бронирования: номера %s заняты',
            ', '.join(result.conflicting_rooms),
            extra={'context': f'PROPERTY {property_id}'},
        )
        raise BookingConflictException(
            conflicting_rooms=result.conflicting_rooms,
            messages=messages,
            details={
                **result.model_dump(by_alias=True, mode='json'),
                'messages': messages,
            },
        )


def _room_label(room_id: str, rooms: Mapping[str, Room]) -> str:
    room = rooms.get(room_id)
    if room is not None and room.room_number:
        return room.room_number
    return room_id


def describe_conflicts(
    result: AvailabilityResult,
    property: Optional[Property] = None,
) -> List[str]:
    """Сообщения о конфликтах для интерфейса.

    Одно сообщение на пару номер/бронь, например:
    'Номер 3 недоступен с 2024-10-10 по 2024-10-12: бронирование GH-2024-007'.
    """
    rooms = {room.id: room for room in property.rooms} if property else {}
    messages: List[str] = []
    for room_id in result.conflicting_rooms:
        label = _room_label(room_id, rooms)
        for booking in result.conflicting_bookings:
            if room_id not in booking.room_ids:
                continue
            messages.append(
                f'Номер {label} недоступен с '
                f'{format_day(booking.check_in)} по '
                f'{format_day(booking.check_out)}: бронирование '
                f'{booking.label}',
            )
    return messages
