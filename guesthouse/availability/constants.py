from enum import Enum

MAX_GUEST_NUMBER = 100
MIN_CALENDAR_YEAR = 1
MAX_CALENDAR_YEAR = 9999


class BookingStatus(str, Enum):
    """Статус бронирования."""

    PENDING = 'pending'  # Ожидает оплаты
    CONFIRMED = 'confirmed'  # Подтверждено
    CANCELLED = 'cancelled'  # Отменено
    EXPIRED = 'expired'  # Истекло

    @property
    def occupies_room(self) -> bool:
        """Занимает ли бронь с этим статусом номер."""
        return self not in INACTIVE_STATUSES


# Отменённые и истёкшие брони остаются в снимке, но номер не занимают
INACTIVE_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.EXPIRED})
