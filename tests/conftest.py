from typing import AsyncGenerator, Callable

from httpx import ASGITransport, AsyncClient
import pytest
import pytest_asyncio

from guesthouse.availability.constants import BookingStatus
from guesthouse.availability.schemas import Booking, Property, Room
from guesthouse.config import settings
from guesthouse.main import app


PROPERTY_ID = 'prop-1'


@pytest.fixture
def make_booking() -> Callable[..., Booking]:  # noqa
    counter = {'value': 0}

    def factory(
        check_in: str,
        check_out: str,
        room_ids: tuple = ('R1',),
        status: BookingStatus = BookingStatus.PENDING,
        property_id: str = PROPERTY_ID,
        booking_id: str | None = None,
        reference_id: str | None = None,
    ) -> Booking:
        counter['value'] += 1
        return Booking(
            id=booking_id or f'b-{counter["value"]}',
            reference_id=reference_id,
            property_id=property_id,
            room_ids=room_ids,
            check_in=check_in,
            check_out=check_out,
            status=status,
        )

    return factory


@pytest.fixture
def guest_house() -> Property:  # noqa
    return Property(
        id=PROPERTY_ID,
        name='Сосновый бор',
        rooms=(
            Room(id='R1', room_number='1', type='standard', capacity=2),
            Room(id='R2', room_number='2', type='deluxe', capacity=3),
            Room(id='R3', room_number='3', type='family', capacity=4),
            Room(
                id='R4',
                room_number='4',
                type='standard',
                capacity=2,
                is_available=False,
            ),
        ),
    )


@pytest.fixture
def permissive_dates(monkeypatch: pytest.MonkeyPatch) -> None:  # noqa
    monkeypatch.setattr(settings.availability, 'STRICT_DATES', False)


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:  # noqa
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url='http://testserver',
    ) as async_client:
        yield async_client
