"""Доступность номеров и защита от двойного бронирования.

Основные компоненты:
    - engine: чистые функции проверки по снимку бронирований
    - AvailabilityService: свободные номера, занятость, календарь
    - transformers: преобразование ответов бэкенда в снимок
"""

from guesthouse.availability.engine import (
    date_ranges_overlap,
    get_booked_dates_for_property,
    get_booked_dates_for_room,
    is_room_available,
    validate_booking,
)
from guesthouse.availability.services import AvailabilityService
from guesthouse.availability.views import router as availability_router


__all__ = [
    'date_ranges_overlap',
    'is_room_available',
    'get_booked_dates_for_room',
    'get_booked_dates_for_property',
    'validate_booking',
    'AvailabilityService',
    'availability_router',
]
