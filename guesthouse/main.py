from contextlib import asynccontextmanager
import time
from typing import AsyncGenerator, Awaitable, Callable

from fastapi import FastAPI, Request, Response

from guesthouse.api import main_router
from guesthouse.common.exception_handlers import add_exception_handlers
from guesthouse.common.logging import (
    initialize_system_logging,
    log_system_api_request,
    log_system_error,
    log_system_event,
)
from guesthouse.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Управляет жизненным циклом FastAPI-приложения."""
    initialize_system_logging()
    yield
    log_system_event('Приложение остановлено')


app = FastAPI(
    title=settings.app.TITLE,
    debug=settings.app.DEBUG,
    lifespan=lifespan,
)

add_exception_handlers(app)


@app.middleware('http')
async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Пишет каждый запрос в системный лог со временем ответа."""
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        log_system_error(f'{request.method} {request.url.path}', e)
        raise
    log_system_api_request(
        method=request.method,
        endpoint=request.url.path,
        status_code=response.status_code,
        duration_ms=(time.perf_counter() - started) * 1000,
    )
    return response


app.include_router(main_router)
