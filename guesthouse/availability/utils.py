from datetime import date, datetime, timedelta
from typing import Iterator, Union

from guesthouse.availability.exceptions import InvalidDateError


DateLike = Union[date, datetime, str]


def to_calendar_day(value: DateLike) -> date:
    """Приводит дату к календарному дню без времени.

    Принимает date, datetime и ISO-строки ('2024-02-15',
    '2024-02-15T14:00:00', '2024-02-15T14:00:00Z'). Время отбрасывается,
    поэтому один и тот же день в любом представлении равен сам себе.
    """
    # datetime - подкласс date, проверяем первым
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == len('YYYY-MM-DD'):
                return date.fromisoformat(text)
            return datetime.fromisoformat(text).date()
        except ValueError as e:
            raise InvalidDateError(value) from e
    raise InvalidDateError(value)


def format_day(value: date) -> str:
    """Форматирует день как YYYY-MM-DD."""
    return value.isoformat()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Перебирает дни от start до end включительно.

    Перевёрнутый диапазон (start > end) не даёт ни одного дня.
    """
    current = start
    while current <= end:
        yield current
        if current == date.max:
            return
        current += timedelta(days=1)
