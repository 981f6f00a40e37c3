"""Системный журнал: HTTP-запросы, сбои и события жизненного цикла.

Файл пишется в JSON по строке на событие, консоль остаётся читаемой.
"""

from datetime import datetime
import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from guesthouse.config import COUNT_FILES, MAX_BYTES, settings


# Поля из extra, которые попадают в JSON
EVENT_FIELDS = (
    'method',
    'endpoint',
    'status_code',
    'response_time_ms',
    'context',
    'details',
)


class SystemJsonFormatter(logging.Formatter):
    """Форматирует запись системного журнала как JSON-объект."""

    def format(self, record: logging.LogRecord) -> str:
        """Собирает время, уровень, компонент, сообщение и поля события."""
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(
                timespec='seconds',
            ),
            'level': record.levelname,
            'component': getattr(record, 'component', 'system'),
            'message': record.getMessage(),
        }
        entry.update(
            (field, getattr(record, field))
            for field in EVENT_FIELDS
            if hasattr(record, field)
        )
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def _build_system_logger() -> logging.Logger:
    logs_dir = settings.logging.DIR / 'system'
    logs_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        logs_dir / 'system_events.log',
        maxBytes=MAX_BYTES,
        backupCount=COUNT_FILES,
        encoding='utf-8',
    )
    file_handler.setFormatter(SystemJsonFormatter())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter(
            fmt='%(asctime)s | %(levelname)-8s | %(component)-6s | '
            '%(message)s',
            datefmt='%d-%m-%Y %H:%M:%S',
        ),
    )

    system = logging.getLogger('guesthouse_system')
    system.setLevel(logging.INFO)
    system.propagate = False
    system.handlers.clear()
    system.addHandler(file_handler)
    system.addHandler(console_handler)
    return system


system_logger = _build_system_logger()


def log_system_api_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_ms: float,
) -> None:
    """Пишет HTTP-запрос в журнал.

    5xx - ERROR, 4xx (в том числе конфликт бронирования) - WARNING.
    """
    if status_code >= 500:
        level = logging.ERROR
    elif status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO

    system_logger.log(
        level,
        '%s %s -> %s (%.0f мс)',
        method,
        endpoint,
        status_code,
        duration_ms,
        extra={
            'component': 'api',
            'method': method,
            'endpoint': endpoint,
            'status_code': status_code,
            'response_time_ms': round(duration_ms, 2),
        },
    )


def log_system_error(context: str, error: Exception) -> None:
    """Пишет необработанное исключение с трассировкой."""
    system_logger.error(
        'Необработанная ошибка: %s: %s',
        context,
        error,
        extra={'component': 'error', 'context': context},
        exc_info=error,
    )


def log_system_event(
    description: str,
    level: int = logging.INFO,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Пишет событие жизненного цикла приложения."""
    extra: Dict[str, Any] = {'component': 'system'}
    if details:
        extra['details'] = details
        description += ' | ' + ', '.join(
            f'{key}={value}' for key, value in details.items()
        )

    system_logger.log(level, description, extra=extra)


def initialize_system_logging() -> None:
    """Фиксирует запуск приложения и ключевые настройки проверок."""
    log_system_event(
        'Приложение запущено',
        details={
            'strict_dates': settings.availability.STRICT_DATES,
            'week_starts_on_sunday': (
                settings.availability.WEEK_STARTS_ON_SUNDAY
            ),
            'log_level': settings.logging.LEVEL,
        },
    )
