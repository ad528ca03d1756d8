"""Main FastAPI application with modularized routes."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from selfassessment.database import init_db
from selfassessment.engine import (
    AlreadyLocked,
    ConfigValidationError,
    InvalidGroupSelection,
    MalformedJournal,
    ResultUnavailable,
    StorageError,
)
from selfassessment.logging_setup import setup_console_logging
from selfassessment.routes import courses, journal, pincode, result

setup_console_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    yield


app = FastAPI(title="SelfAssessment API", lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Domain errors
@app.exception_handler(ConfigValidationError)
def config_validation_error(request: Request, exc: ConfigValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400, content={"detail": "Invalid course config", "errors": exc.errors}
    )


@app.exception_handler(InvalidGroupSelection)
def invalid_group_selection(request: Request, exc: InvalidGroupSelection) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(MalformedJournal)
def malformed_journal(request: Request, exc: MalformedJournal) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(AlreadyLocked)
def already_locked(request: Request, exc: AlreadyLocked) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": "Results are locked"})


@app.exception_handler(ResultUnavailable)
def result_unavailable(request: Request, exc: ResultUnavailable) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StorageError)
def storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Database error"})


# Include routers
app.include_router(courses.router)
app.include_router(pincode.router)
app.include_router(journal.router)
app.include_router(result.router)
