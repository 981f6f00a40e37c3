from fastapi import APIRouter

from guesthouse.availability import availability_router


main_router = APIRouter()

main_router.include_router(
    availability_router,
    prefix='/availability',
    tags=['Доступность номеров'],
)


@main_router.get('/health', summary='Проверка работоспособности')
async def health() -> dict[str, str]:
    """Отвечает, что сервис запущен."""
    return {'status': 'ok'}
