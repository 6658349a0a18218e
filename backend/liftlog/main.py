# liftlog/main.py
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from liftlog import errors
from liftlog.db import SessionLocal, init_db  # SessionLocal for healthz DB check
from liftlog.routers.exercise_types import router as exercise_types_router
from liftlog.routers.exercises import router as exercises_router
from liftlog.routers.groups import router as groups_router
from liftlog.routers.users import router as users_router
from liftlog.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()

logging.getLogger("liftlog").setLevel(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES:
        init_db()
    yield


app = FastAPI(
    title="Liftlog API",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "users", "description": "Users and their lifting statistics"},
        {"name": "exercises", "description": "Exercises with their sets and comments"},
        {"name": "exercise-types", "description": "Exercise types, unique by name"},
        {"name": "groups", "description": "Groups of users"},
    ],
)

# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = req_id
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

app.add_exception_handler(errors.LiftlogError, errors.liftlog_exception_handler)  # type: ignore
app.add_exception_handler(RequestValidationError, errors.validation_exception_handler)  # type: ignore
app.add_exception_handler(IntegrityError, errors.integrity_exception_handler)  # type: ignore

@app.get("/")
def root():
    return {"ok": True, "name": "Liftlog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(users_router)
app.include_router(exercises_router)
app.include_router(exercise_types_router)
app.include_router(groups_router)
