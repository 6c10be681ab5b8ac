import itertools
from typing import NamedTuple

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from proconnect.db.models import Base
from proconnect.db.session import get_db
from proconnect.main import app

PASSWORD = "Secret123"


class Member(NamedTuple):
    id: str
    email: str
    token: str

    @property
    def headers(self):
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register users through the API and return their ids and tokens."""
    counter = itertools.count(1)

    async def _make(first_name="Alice", last_name="Doe", headline=None):
        email = f"{first_name.lower()}{next(counter)}@example.com"
        response = await client.post(
            "/api/auth/register",
            json={
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "password": PASSWORD,
                "headline": headline,
            },
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return Member(id=data["user"]["id"], email=email, token=data["token"])

    return _make


@pytest.fixture
def connect(client):
    """Create an accepted connection between two members."""

    async def _connect(requester: Member, recipient: Member):
        response = await client.post(f"/api/connections/request/{recipient.id}", headers=requester.headers)
        assert response.status_code == 201, response.text
        connection_id = response.json()["data"]["id"]
        response = await client.put(f"/api/connections/accept/{connection_id}", headers=recipient.headers)
        assert response.status_code == 200, response.text
        return connection_id

    return _connect
