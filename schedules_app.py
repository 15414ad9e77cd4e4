"""PillCare schedules API (FastAPI): list and delete medication schedules"""
import os, logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from pillcare import db as dbmod, setup_logging
from pillcare.errors import ApiError, BadRequest, NotFound, MethodNotAllowed, InternalError

setup_logging()
log = logging.getLogger("pillcare.api")

app = FastAPI(title="PillCare schedules")

def default_clock():
    return dbmod.today_in_tz(dbmod.SCHEDULE_TZ)

# the store is opened on first use and shared by later requests
app.state.store = None
app.state.clock = default_clock

async def get_store(app):
    if app.state.store is None:
        app.state.store = await dbmod.open_store()
    return app.state.store

@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # routing errors (wrong verb, unknown path) use the same body shape
    message = MethodNotAllowed.message if exc.status_code == 405 else exc.detail
    return JSONResponse({"error": message}, status_code=exc.status_code, headers=getattr(exc, "headers", None))

@app.on_event("startup")
async def startup_event():
    log.info("Starting PillCare schedules API (tz=%s)", dbmod.SCHEDULE_TZ)

@app.get("/ping")
async def ping():
    return {"status": "ok"}

@app.get("/api/get-schedules")
async def get_schedules(request: Request, userId: Optional[str] = None):
    if not userId:
        raise BadRequest("Missing userId")
    try:
        store = await get_store(request.app)
        schedules = await store.list_schedules(userId, request.app.state.clock())
    except Exception:
        log.exception("Error fetching schedules for user %s", userId)
        raise InternalError()
    return {"success": True, "schedules": schedules}

@app.delete("/api/delete-schedule")
async def delete_schedule(request: Request):
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise BadRequest("Missing required fields")
    schedule_id = body.get("scheduleId")
    user_id = body.get("userId")
    if not schedule_id or not user_id:
        raise BadRequest("Missing required fields")
    try:
        store = await get_store(request.app)
        # owner check is part of the delete predicate
        deleted = await store.delete_schedule(schedule_id, user_id)
    except Exception:
        log.exception("Error deleting schedule %s", schedule_id)
        raise InternalError()
    if not deleted:
        raise NotFound("Schedule not found")
    return {"success": True}

# run uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("schedules_app:app", host="0.0.0.0", port=int(os.getenv("PORT", 8080)))
