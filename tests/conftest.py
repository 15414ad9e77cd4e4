import asyncio, datetime
import aiosqlite
import pytest
from fastapi.testclient import TestClient

import schedules_app
from pillcare.db import SqliteScheduleStore

SCHEMA = '''
CREATE TABLE medication_schedules (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    pet_id INTEGER,
    pet_name TEXT,
    medication_name TEXT,
    dosage TEXT,
    time TEXT,
    start_date TEXT,
    days_count INTEGER,
    color TEXT,
    note TEXT,
    is_active INTEGER DEFAULT 1,
    created_at TEXT
)
'''.strip()

TODAY = datetime.date(2024, 3, 10)


async def _create(path):
    async with aiosqlite.connect(path) as db:
        await db.execute(SCHEMA)
        await db.commit()


async def _insert(path, **row):
    values = dict(pet_id=1, pet_name="Barsik", medication_name="Amoxicillin", dosage="5 ml",
                  time="08:00", start_date="2024-03-01", days_count=7, color="#ff0000",
                  note=None, is_active=1, created_at="2024-03-01T08:00:00")
    values.update(row)
    cols = ",".join(values)
    marks = ",".join("?" for _ in values)
    async with aiosqlite.connect(path) as db:
        cur = await db.execute(f"INSERT INTO medication_schedules ({cols}) VALUES ({marks})", tuple(values.values()))
        await db.commit()
        return cur.lastrowid


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "pillcare.db")
    asyncio.run(_create(path))
    return path


@pytest.fixture
def add_schedule(db_path):
    def add(**row):
        return asyncio.run(_insert(db_path, **row))
    return add


@pytest.fixture
def client(db_path):
    schedules_app.app.state.store = SqliteScheduleStore(db_path)
    schedules_app.app.state.clock = lambda: TODAY
    with TestClient(schedules_app.app) as c:
        yield c
    schedules_app.app.state.store = None
    schedules_app.app.state.clock = schedules_app.default_clock
