import asyncio
import os
from datetime import datetime

import pytest
import pytest_asyncio

# Must be set before travelbudget.core.database builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from travelbudget.core.database import get_db
from travelbudget.core.init_db import init_db
from travelbudget.dependencies.owner import get_clock
from travelbudget.main import app

FIXED_NOW = datetime(2025, 1, 1, 9, 0, 0)


def make_engine(tmp_path):
    return create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)


@pytest_asyncio.fixture
async def session(tmp_path):
    """A session on a fresh file-backed database."""
    engine = make_engine(tmp_path)
    await init_db(engine)
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
    async with SessionLocal() as db:
        yield db
    await engine.dispose()


@pytest.fixture
def client(tmp_path):
    """TestClient against a fresh database with "now" pinned to FIXED_NOW."""
    engine = make_engine(tmp_path)
    asyncio.run(init_db(engine))
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

    async def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            await db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers():
    return {"X-User-Id": "user-1"}


@pytest.fixture
def sample_trip():
    """Plain trip data in the camelCase shape of stored documents."""
    return {
        "name": "Lisbon Spring",
        "destination": "Lisbon, Portugal",
        "startDate": "2025-04-10",
        "endDate": "2025-04-17",
        "currency": "EUR",
        "tags": ["city", "food"],
        "baseCost": "1000",
        "flights": [{"from": "LHR", "to": "LIS", "cost": 200}],
        "hotels": [{"name": "Casa", "cost": "300"}],
        "includesAccommodation": False,
        "additionalExpenses": [{"description": "Tram pass", "amount": 40}],
        "deposit": 200,
        "depositPaid": True,
        "depositDueDate": "2024-12-01",
        "monthlyPayments": [
            {"description": "February", "amount": 300, "dueDate": "2025-02-01", "paid": False},
            {"description": "January", "amount": 300, "dueDate": "2025-01-05", "paid": False},
        ],
        "payments": [
            {"description": "Tour", "amount": "50", "dueDate": "2025-01-20", "paid": False},
        ],
    }
