import logging
from typing import Any, List, Optional

from guesthouse.common.exceptions import (
    AppException,
    ConflictException,
    InternalErrorException,
    ValidationErrorException,
)


logger = logging.getLogger('app')


class InvalidDateError(ValueError):
    """Значение нельзя привести к календарному дню."""

    def __init__(self, value: Any) -> None:
        """Сохраняет исходное значение для сообщения об ошибке."""
        self.value = value
        super().__init__(
            f'Некорректная дата {value!r}: ожидается формат YYYY-MM-DD',
        )


class BookingConflictException(ConflictException):
    """Выбранные номера заняты на запрошенные даты."""

    def __init__(
        self,
        conflicting_rooms: List[str],
        messages: Optional[List[str]] = None,
        details: Optional[Any] = None,
    ) -> None:
        """Инициализирует конфликт с перечнем занятых номеров."""
        self.conflicting_rooms = conflicting_rooms
        self.messages = messages or []
        rooms = ', '.join(conflicting_rooms)
        super().__init__(
            message=(
                f'Номера {rooms} недоступны на выбранные даты. '
                'Выберите другие даты или номера.'
            ),
            details=details,
        )


def handle_availability_exceptions(e: Exception, action: str) -> None:
    """Централизованная обработка исключений для проверок доступности.

    Args:
        e: Возникшее исключение.
        action: Действие (например, 'проверке номера').

    """
    if isinstance(e, AppException):
        raise e

    if isinstance(e, InvalidDateError):
        logger.warning(
            'Некорректная дата при %s: %s',
            action,
            str(e),
        )
        raise ValidationErrorException(str(e)) from e

    logger.critical(
        'Неожиданная ошибка при %s: %s',
        action,
        str(e),
        exc_info=True,
    )
    raise InternalErrorException() from e
