from datetime import datetime, timezone
from pathlib import Path
import sys

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clinic.core.database import Base, get_db  # noqa: E402
from clinic.modules.calendar import models  # noqa: E402,F401
from clinic.modules.calendar.schemas import Doctor, Patient  # noqa: E402
from clinic.modules.calendar.service import GridService  # noqa: E402
from main import create_app  # noqa: E402

# Thursday afternoon inside the reference week of 2025-03-10.
FIXED_NOW = datetime(2025, 3, 13, 14, 47, tzinfo=timezone.utc)


@pytest.fixture
def doctors() -> list[Doctor]:
    return [
        Doctor(id="D1", first_name="Anna", last_name="Petrova", specialization="Cardiologist"),
        Doctor(
            id="D2",
            first_name="Ivan",
            last_name="Sokolov",
            specialization="Surgeon",
            working_hours={"start": "12:00", "end": "18:00", "working_days": [2, 4]},
        ),
    ]


@pytest.fixture
def patients() -> list[Patient]:
    return [
        Patient(id="P1", first_name="Maria", last_name="Ivanova"),
        Patient(id="P2", first_name="Oleg", last_name="Smirnov"),
    ]


@pytest.fixture
def fixed_clock(monkeypatch):
    monkeypatch.setattr(GridService, "_now", lambda self: FIXED_NOW)
    return FIXED_NOW


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    async with SessionLocal() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session):
    app = create_app()

    async def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
