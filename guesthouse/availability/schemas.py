from datetime import date
from typing import Annotated, Any, List, Optional, Tuple

from pydantic import BeforeValidator, ConfigDict, Field, field_validator

from guesthouse.availability.constants import (
    MAX_CALENDAR_YEAR,
    MAX_GUEST_NUMBER,
    MIN_CALENDAR_YEAR,
    BookingStatus,
)
from guesthouse.availability.utils import to_calendar_day
from guesthouse.common.schemas import CamelModel


# Календарный день: строки и datetime приводятся к date на границе
CalendarDate = Annotated[date, BeforeValidator(to_calendar_day)]


class Room(CamelModel):
    """Номер гостевого дома."""

    id: str
    room_number: str = ''
    type: str = ''
    capacity: int = Field(default=1, gt=0)
    is_available: bool = Field(
        default=True,
        description='Номер открыт для бронирования администратором.',
    )

    model_config = ConfigDict(frozen=True)


class Property(CamelModel):
    """Объект размещения с его номерами."""

    id: str
    name: str = ''
    rooms: Tuple[Room, ...] = ()

    model_config = ConfigDict(frozen=True)


class Booking(CamelModel):
    """Бронирование одного или нескольких номеров объекта.

    Снимок только для чтения: движок доступности его не изменяет.
    """

    id: str
    reference_id: Optional[str] = None
    property_id: str
    room_ids: Tuple[str, ...] = ()
    check_in: CalendarDate
    check_out: CalendarDate
    status: BookingStatus = BookingStatus.PENDING

    model_config = ConfigDict(frozen=True)

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        """Приводит строковый статус к нижнему регистру."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def occupies_room(self) -> bool:
        """Занимает ли бронь номера (не отменена и не истекла)."""
        return self.status.occupies_room

    @property
    def label(self) -> str:
        """Номер брони для сообщений: reference_id или id."""
        return self.reference_id or self.id


class AvailabilityResult(CamelModel):
    """Результат проверки мультиномерного бронирования."""

    is_valid: bool
    conflicting_rooms: List[str] = Field(default_factory=list)
    conflicting_bookings: List[Booking] = Field(default_factory=list)


class RoomOccupancy(CamelModel):
    """Занятые дни одного номера."""

    room_id: str
    room_number: str = ''
    booked_dates: List[str] = Field(default_factory=list)


class CalendarDay(CamelModel):
    """Ячейка календаря на месяц."""

    day: date
    booked: bool = False
    past: bool = False
    selected: bool = False
    in_range: bool = False
    selectable: bool = True


class CalendarMonth(CamelModel):
    """Календарь на месяц для отображения занятости."""

    year: int
    month: int
    leading_blanks: int = Field(
        ge=0,
        description='Пустые ячейки перед первым днём месяца.',
    )
    days: List[CalendarDay] = Field(default_factory=list)


class SnapshotRequest(CamelModel):
    """Базовый запрос: снимок бронирований передаётся в каждом запросе."""

    bookings: List[Booking] = Field(default_factory=list)


class RoomAvailabilityRequest(SnapshotRequest):
    """Схема запроса проверки одного номера."""

    room_id: str
    property_id: str
    check_in: CalendarDate
    check_out: CalendarDate
    exclude_booking_id: Optional[str] = Field(
        None,
        description='Бронь, которая не конфликтует сама с собой при '
        'редактировании.',
    )


class RoomAvailabilityResponse(CamelModel):
    """Схема ответа проверки одного номера."""

    room_id: str
    available: bool


class BookingValidationRequest(SnapshotRequest):
    """Схема запроса проверки мультиномерного бронирования."""

    room_ids: List[str] = Field(
        min_length=1,
        description='Должен быть хотя бы один номер.',
    )
    property_id: str
    check_in: CalendarDate
    check_out: CalendarDate
    exclude_booking_id: Optional[str] = None
    property: Optional[Property] = Field(
        None,
        description='Объект с номерами: для проверки принадлежности номеров, '
        'вместимости и номеров комнат в сообщениях.',
    )
    guests: Optional[int] = Field(None, gt=0, le=MAX_GUEST_NUMBER)


class BookingValidationResponse(AvailabilityResult):
    """Результат проверки с сообщениями для интерфейса."""

    messages: List[str] = Field(default_factory=list)


class BookedDatesRequest(SnapshotRequest):
    """Схема запроса занятых дней номера или всего объекта."""

    property_id: str
    room_id: Optional[str] = None


class BookedDatesResponse(CamelModel):
    """Отсортированные занятые дни."""

    property_id: str
    room_id: Optional[str] = None
    dates: List[str] = Field(default_factory=list)


class AvailableRoomsRequest(SnapshotRequest):
    """Схема запроса свободных номеров объекта на период."""

    property: Property
    check_in: Optional[CalendarDate] = None
    check_out: Optional[CalendarDate] = None
    guests: Optional[int] = Field(
        None,
        gt=0,
        le=MAX_GUEST_NUMBER,
        description='Количество гостей должно быть больше 0 и не превышать '
        f'максимальное значение {MAX_GUEST_NUMBER}.',
    )
    exclude_booking_id: Optional[str] = None


class OccupancyRequest(SnapshotRequest):
    """Схема запроса занятости всех номеров объекта."""

    property: Property


class CalendarRequest(SnapshotRequest):
    """Схема запроса календаря на месяц."""

    property_id: str
    room_id: Optional[str] = None
    year: int = Field(ge=MIN_CALENDAR_YEAR, le=MAX_CALENDAR_YEAR)
    month: int = Field(ge=1, le=12)
    selected_check_in: Optional[CalendarDate] = None
    selected_check_out: Optional[CalendarDate] = None
    today: Optional[CalendarDate] = None
