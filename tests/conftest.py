from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from app import database
from app.main import app, current_time
from app.seed import seed_demo_data


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    # A Monday morning, inside the day band
    return FakeClock(datetime(2024, 3, 4, 9, 0))


@pytest.fixture
async def ledger():
    await database.init_db()
    async with database.session_scope() as db:
        await seed_demo_data(db)
    yield database.session_scope
    await database.dispose_db()


@pytest.fixture
async def client(ledger, clock):
    app.dependency_overrides[current_time] = clock
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
