import os
import subprocess
from contextlib import asynccontextmanager
from datetime import datetime
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from door_control.config.logger import app_logger, log_request_start, log_request_end, log_request_error
from door_control.config.settings import settings
from door_control.db.db import init_db, close_db, ping_database
from door_control.db.seed import ensure_seed_admin_user
from door_control.api.auth.router import router as auth_router
from door_control.api.doors.router import router as doors_router
from door_control.api.tags.router import router as tags_router
from door_control.api.access_history.router import router as access_history_router
from door_control.api.alarm.router import router as alarm_router
from door_control.utils.errors import DoorControlError
from door_control.utils.responses import error_response


_git_sha_cache: Optional[str] = None


def get_git_sha() -> str:
    """Get the current Git commit SHA (cached to avoid blocking)."""
    global _git_sha_cache
    if _git_sha_cache is not None:
        return _git_sha_cache

    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=1.0
        )
        _git_sha_cache = result.stdout.strip()[:8]
        return _git_sha_cache
    except (subprocess.CalledProcessError, FileNotFoundError, subprocess.TimeoutExpired):
        _git_sha_cache = "local-dev"
        return _git_sha_cache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup and shutdown events."""
    app_logger.info(f"{settings.APP_NAME} API starting up")
    if settings.uses_default_auth_secret:
        app_logger.warning("LOCAL_AUTH_SECRET is not set; tokens are signed with the built-in default secret")

    await init_db()
    is_ok, message = await ping_database()
    if is_ok:
        app_logger.info(f"Database connection: {message}")
        await ensure_seed_admin_user()
    else:
        app_logger.warning(f"Database connection issue: {message}")

    app_logger.info("Application initialized successfully")

    yield

    await close_db()
    app_logger.info(f"{settings.APP_NAME} API shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    license_info={
        "name": "GNU Lesser General Public License v3.0 or later",
        "url": "https://www.gnu.org/licenses/lgpl-3.0.html",
    },
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests with timing information."""
    start_time = datetime.now()

    log_request_start(request)

    try:
        response = await call_next(request)
        process_time = (datetime.now() - start_time).total_seconds()
        log_request_end(request, response.status_code, process_time)
        return response

    except Exception as e:
        process_time = (datetime.now() - start_time).total_seconds()
        log_request_error(request, e, process_time)
        raise


def _field_name(loc) -> str:
    # drop the "body"/"query"/"path" prefix FastAPI puts in front
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer malformed requests with 400 and one message per offending field."""
    messages = [f"{_field_name(err['loc'])} {err['msg']}" for err in exc.errors()]
    body = error_response(400, "Validation Error", messages)
    return JSONResponse(status_code=400, content=body.model_dump(mode="json", by_alias=True))


@app.exception_handler(DoorControlError)
async def domain_exception_handler(request: Request, exc: DoorControlError):
    body = error_response(exc.status_code, exc.error, exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json", by_alias=True))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = error_response(exc.status_code, _reason(exc.status_code), str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=exc.headers,
    )


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


@app.get("/", tags=["health"])
async def root():
    """Root endpoint with basic API information."""
    return {
        "message": f"Welcome to {settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "status": "operational",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/status", tags=["health"])
async def status():
    """Status endpoint with build information for CI/CD monitoring."""
    build_number = os.getenv("BUILD_NUMBER", "local-dev")
    git_sha = os.getenv("GIT_SHA", os.getenv("GITHUB_SHA", get_git_sha()))
    environment = os.getenv("ENVIRONMENT", os.getenv("ENV", "development"))

    return {
        "status": "ok",
        "build": build_number,
        "sha": git_sha,
        "env": environment
    }


@app.get("/health/db", tags=["health"])
async def health_db():
    """Database health endpoint."""
    is_ok, message = await ping_database()
    if not is_ok:
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "db": "unavailable", "message": message}
        )
    return {"status": "ok", "db": "available", "message": message}


app.include_router(auth_router)
app.include_router(doors_router)
app.include_router(tags_router)
app.include_router(access_history_router)
app.include_router(alarm_router)


if __name__ == "__main__":
    import uvicorn

    app_logger.info(f"Starting {settings.APP_NAME} API server")

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None  # Use our custom logger
    )
