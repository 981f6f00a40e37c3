"""Кастомные исключения для проекта."""
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional


@dataclass
class AppException(Exception):
    """Базовое исключение приложения."""

    status_code: int
    code: int
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:
        """Возвращает текст ошибки для логов."""
        return self.message


class ValidationErrorException(AppException):
    """Ошибка валидации данных."""

    def __init__(
            self,
            message: str = 'Ошибка валидации данных',
            details: Optional[Any] = None,
    ) -> None:
        """Инициализирует ошибку валидации данных (HTTP 422)."""
        super().__init__(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            code=HTTPStatus.UNPROCESSABLE_ENTITY,
            message=message,
            details=details,
        )


class BadRequestException(AppException):
    """Ошибка в параметрах запроса."""

    def __init__(self, message: str = 'Ошибка в параметрах запроса') -> None:
        """Инициализирует ошибку запроса (HTTP 400)."""
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            code=HTTPStatus.BAD_REQUEST,
            message=message,
        )


class ConflictException(AppException):
    """Конфликт с текущим состоянием данных."""

    def __init__(
            self,
            message: str = 'Конфликт данных',
            details: Optional[Any] = None,
    ) -> None:
        """Инициализирует ошибку конфликта (HTTP 409)."""
        super().__init__(
            status_code=HTTPStatus.CONFLICT,
            code=HTTPStatus.CONFLICT,
            message=message,
            details=details,
        )


class InternalErrorException(AppException):
    """Внутренняя ошибка сервера."""

    def __init__(self, message: str = 'Внутренняя ошибка сервера.') -> None:
        """Инициализирует внутреннюю ошибку (HTTP 500)."""
        super().__init__(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message,
        )
