"""Обработчики исключений для FastAPI приложения.

Все ошибки отдаются в одном формате: {code, message, details}.
"""
from http import HTTPStatus
from typing import Any, Dict, List, Sequence

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from guesthouse.common.exceptions import AppException
from guesthouse.common.schemas import CustomErrorResponse


JSON_DECODE_ERRORS = ('json_invalid', 'value_error.jsondecode')


def _error_response(
    status_code: HTTPStatus,
    message: str,
    details: Any = None,
) -> JSONResponse:
    body = CustomErrorResponse(
        code=status_code.value,
        message=message,
        details=details,
    ).model_dump(exclude_none=True)
    return JSONResponse(
        status_code=status_code.value,
        content=jsonable_encoder(body, by_alias=True),
    )


def _field_path(loc: Sequence[Any]) -> str:
    """Путь к полю без служебного префикса: body.bookings.0.checkIn."""
    parts = [str(part) for part in loc]
    if parts and parts[0] in ('body', 'query', 'path'):
        parts = parts[1:]
    return '.'.join(parts)


def _validation_details(errors: Sequence[Dict[str, Any]]) -> List[dict]:
    return [
        {'field': _field_path(err.get('loc', ())), 'msg': err.get('msg')}
        for err in errors
    ]


def add_exception_handlers(app: FastAPI) -> None:
    """Добавляет обработчики исключений приложения."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        return _error_response(
            HTTPStatus(exc.code),
            exc.message,
            exc.details,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        # битый JSON - 400, JSON не по схеме - 422
        errors = exc.errors()
        if any(err.get('type') in JSON_DECODE_ERRORS for err in errors):
            return _error_response(
                HTTPStatus.BAD_REQUEST,
                'Ошибка в параметрах запроса, проверьте JSON',
            )

        return _error_response(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            'Ошибка валидации данных',
            _validation_details(errors),
        )
