"""Module: main."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from vetcare.api.v1.api import api_router
from vetcare.core.config import settings
from vetcare.core.errors import (
    AccountNotFound,
    DuplicateEmail,
    InvalidCredential,
    InvalidCredentialFormat,
    InvalidTimeFormat,
    MalformedInput,
    NotFound,
    VetcareError,
)
from vetcare.core.logging_config import configure_logging
from vetcare.db.init_db import init_db
from vetcare.db.session import engine

# Transport status per failure kind; most specific classes first.
ERROR_STATUS = [
    (DuplicateEmail, 409),
    (AccountNotFound, 404),
    (NotFound, 404),
    (InvalidCredential, 401),
    (InvalidCredentialFormat, 500),
    (InvalidTimeFormat, 400),
    (MalformedInput, 400),
]


def status_for(exc: VetcareError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    init_db(engine)
    logger.info("Database schema ready")
    yield


app = FastAPI(title="Vetcare API", version="0.1.0", lifespan=lifespan)

app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VetcareError)
async def vetcare_error_handler(request: Request, exc: VetcareError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"message": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})
