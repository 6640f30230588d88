from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy import text

import models  # noqa: F401  registers every table on Base.metadata
from database import Base, engine
from routes import auth, travelers, tripcrews, join, trips
from utils.logger import setup_api_logger

Base.metadata.create_all(bind=engine)

# setup file logger for API failures
api_logger = setup_api_logger()

# Databases created before crews had handles (safe startup migration)
if engine.dialect.name == "postgresql":
    try:
        with engine.begin() as conn:
            conn.execute(text("ALTER TABLE trip_crews ADD COLUMN IF NOT EXISTS handle VARCHAR(64);"))
            conn.execute(text("CREATE UNIQUE INDEX IF NOT EXISTS ix_trip_crews_handle ON trip_crews (handle);"))
    except Exception:
        api_logger.exception("Automatic handle migration failed; run DB migrations manually")

app = FastAPI(title="TripWell API (Travelers, TripCrews, Invites, Trips)")


@app.exception_handler(Exception)
async def generic_exception_handler(request, exc):
    # log request info and stacktrace
    api_logger.error("Unhandled exception on %s %s | query=%s | error=%s",
                     request.method, request.url.path, request.url.query, str(exc),
                     exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    api_logger.warning("HTTPException on %s %s | status=%s | query=%s | detail=%s",
                       request.method, request.url.path, exc.status_code,
                       request.url.query, str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(auth.router)
app.include_router(travelers.router)
app.include_router(tripcrews.router)
app.include_router(join.router)
app.include_router(trips.router)
