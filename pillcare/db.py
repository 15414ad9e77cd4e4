"""Medication schedule storage.

Production reads and deletes go to the managed Supabase database. Setting
``DB_PATH`` switches to a local SQLite file holding the same table, for
development and tests.
"""
import datetime, logging, os
import aiosqlite
import pytz
from supabase import acreate_client

log = logging.getLogger("pillcare.db")

TABLE = "medication_schedules"
DB = os.getenv("DB_PATH")
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")
SCHEDULE_TZ = os.getenv("SCHEDULE_TZ", "UTC")

SELECT_SCHEDULES = '''
SELECT id, user_id, pet_id, pet_name, medication_name, dosage, time,
       start_date, days_count, color, note, is_active, created_at
FROM medication_schedules
WHERE user_id=?
ORDER BY created_at DESC
'''.strip()

def today_in_tz(tz_name=SCHEDULE_TZ):
    return datetime.datetime.now(pytz.timezone(tz_name)).date()

def _as_date(value):
    if value is None or isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value)[:10])

def end_date_for(start_date, days_count):
    start = _as_date(start_date)
    if start is None or days_count is None:
        return None
    return start + datetime.timedelta(days=int(days_count))

def is_current(end_date, today):
    # last day of the course still counts
    end_date = _as_date(end_date)
    if end_date is None:
        return True
    return not today > end_date

def with_derived_fields(row, today):
    s = dict(row)
    end = end_date_for(s.get("start_date"), s.get("days_count"))
    s["end_date"] = end.isoformat() if end else None
    s["is_active"] = bool(s.get("is_active"))
    s["is_current"] = is_current(end, today)
    return s


class SupabaseScheduleStore:
    def __init__(self, client):
        self.client = client

    async def list_schedules(self, user_id, today):
        resp = await (self.client.table(TABLE)
                      .select("*")
                      .eq("user_id", user_id)
                      .order("created_at", desc=True)
                      .execute())
        return [with_derived_fields(r, today) for r in resp.data or []]

    async def delete_schedule(self, schedule_id, user_id):
        resp = await (self.client.table(TABLE)
                      .delete()
                      .eq("id", schedule_id)
                      .eq("user_id", user_id)
                      .execute())
        deleted = len(resp.data or [])
        log.info("Deleted %s schedule(s) id=%s user=%s", deleted, schedule_id, user_id)
        return deleted


class SqliteScheduleStore:
    def __init__(self, path):
        self.path = path

    def _connect(self):
        # mode=rw: a missing file is an error, never a fresh empty database
        return aiosqlite.connect(f"file:{self.path}?mode=rw", uri=True)

    async def list_schedules(self, user_id, today):
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            cur = await db.execute(SELECT_SCHEDULES, (user_id,))
            rows = await cur.fetchall()
        return [with_derived_fields(r, today) for r in rows]

    async def delete_schedule(self, schedule_id, user_id):
        async with self._connect() as db:
            cur = await db.execute("DELETE FROM medication_schedules WHERE id=? AND user_id=?", (schedule_id, user_id))
            await db.commit()
            deleted = cur.rowcount
        log.info("Deleted %s schedule(s) id=%s user=%s", deleted, schedule_id, user_id)
        return deleted


async def open_store(db_path=None, url=None, key=None):
    db_path = db_path or DB
    if db_path:
        log.info("Using local schedule store %s", db_path)
        return SqliteScheduleStore(db_path)
    url = url or SUPABASE_URL
    key = key or SUPABASE_SERVICE_KEY
    if not url or not key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_KEY are required")
    client = await acreate_client(url, key)
    log.info("Using Supabase schedule store %s", url)
    return SupabaseScheduleStore(client)
