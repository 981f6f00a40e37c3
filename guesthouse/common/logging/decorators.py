import functools
import inspect
from typing import Any, Callable

from guesthouse.common.exceptions import AppException
from guesthouse.common.logging.config import logger


# Поля запроса, которые не пишутся в лог целиком
SNAPSHOT_FIELDS = frozenset({'bookings', 'property', 'rooms'})


def _extract_context(kwargs: dict[str, Any]) -> str:
    """Определяет контекст операции по аргументам функции.

    Ищет property_id (или property.id) и room_id в pydantic-запросе.
    Без них контекст - SYSTEM.
    """
    for value in kwargs.values():
        property_id = getattr(value, 'property_id', None)
        if property_id is None:
            property_id = getattr(getattr(value, 'property', None), 'id', None)
        if property_id is None:
            continue
        room_id = getattr(value, 'room_id', None)
        if room_id:
            return f'ROOM {property_id}/{room_id}'
        return f'PROPERTY {property_id}'

    return 'SYSTEM'


def _summarize(value: Any) -> Any:
    """Сводка аргумента: снимок бронирований заменяется его размером.

    Снимок может содержать сотни записей и персональные данные гостей.
    """
    if not hasattr(value, 'model_dump'):
        return value

    summary = {
        field: item
        for field, item in value.model_dump(exclude_none=True).items()
        if field not in SNAPSHOT_FIELDS
    }
    bookings = getattr(value, 'bookings', None)
    if bookings is not None:
        summary['bookings_count'] = len(bookings)
    return summary


class _ActionLog:
    """Сообщения одного вызова: запуск, успех и неудача."""

    def __init__(self, action: str, kwargs: dict[str, Any]) -> None:
        self.action = action
        self.kwargs = kwargs
        self.extra = {'context': _extract_context(kwargs)}

    def start(self) -> None:
        params = {key: _summarize(value) for key, value in self.kwargs.items()}
        msg = f'Запуск 🚀 {self.action}'
        if params:
            msg += f' | параметры: {params}'
        logger.info(msg, extra=self.extra)

    def success(self) -> None:
        logger.info(f'Успешно ✅ {self.action}', extra=self.extra)

    def failure(self, error: Exception) -> None:
        msg = f'Неудача ❌ {self.action} | {error}'
        # конфликт и ошибки клиента ожидаемы, это не сбой сервиса
        if isinstance(error, AppException) and error.status_code < 500:
            logger.warning(msg, extra=self.extra)
        else:
            logger.error(msg, extra=self.extra)


def log_action(
    action: str,
    skip_logging: bool = False,
    only_errors: bool = False,
) -> Callable:
    """Декоратор для логирования обработчиков.

    Args:
        action: Описание действия для лога
        skip_logging: Пропустить логирование старта и успеха
        only_errors: Логировать только ошибки

    Example:
        @log_action('Проверка доступности номера.')
        async def check_room(payload: RoomAvailabilityRequest) -> ...:
            ...

    """
    quiet = skip_logging or only_errors

    def wrapper(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_inner(*args: Any, **kwargs: Any) -> Any:
                log = _ActionLog(action, kwargs)
                if not quiet:
                    log.start()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    log.failure(e)
                    raise
                if not quiet:
                    log.success()
                return result

            return async_inner

        @functools.wraps(func)
        def sync_inner(*args: Any, **kwargs: Any) -> Any:
            log = _ActionLog(action, kwargs)
            if not quiet:
                log.start()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.failure(e)
                raise
            if not quiet:
                log.success()
            return result

        return sync_inner

    return wrapper
