"""Описания ответов для OpenAPI.

Все ошибки отдаются схемой CustomErrorResponse.
"""

from http import HTTPStatus
from typing import Any, Dict, Union

from guesthouse.common.schemas import CustomErrorResponse


ResponseType = Dict[Union[int, str], Dict[str, Any]]

ERROR_DESCRIPTIONS = {
    HTTPStatus.BAD_REQUEST: 'Некорректный JSON или перевёрнутый период',
    HTTPStatus.CONFLICT: 'Номера заняты на выбранные даты',
    HTTPStatus.UNPROCESSABLE_ENTITY: 'Ошибка валидации данных',
    HTTPStatus.INTERNAL_SERVER_ERROR: 'Внутренняя ошибка сервера',
}


def error_responses(*statuses: HTTPStatus) -> ResponseType:
    """Собирает описания ошибок для перечисленных статусов."""
    return {
        status.value: {
            'description': ERROR_DESCRIPTIONS[status],
            'model': CustomErrorResponse,
        }
        for status in statuses
    }


def query_responses() -> ResponseType:
    """Ответы для запросов, которые только читают снимок."""
    return error_responses(
        HTTPStatus.BAD_REQUEST,
        HTTPStatus.UNPROCESSABLE_ENTITY,
        HTTPStatus.INTERNAL_SERVER_ERROR,
    )


def check_responses() -> ResponseType:
    """Ответы для проверок, которые могут завершиться конфликтом."""
    return {
        **query_responses(),
        **error_responses(HTTPStatus.CONFLICT),
    }
