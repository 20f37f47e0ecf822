# -*- coding: utf-8 -*-
"""
Main FastAPI application for the CCLDI childcare-center administration backend.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ccldi.config import Config
from ccldi.database import engine, Base
from ccldi.errors import ComputationError, ReceivablesError
from ccldi.models import center, student, billing, setting  # noqa: F401 (registers the tables)
from ccldi.routes import billing_fastapi, centers_fastapi, settings_fastapi, students_fastapi


logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=Config.LOG_FILE
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        Base.metadata.create_all(bind=engine)
        logging.info("Database tables ready")
    except Exception as e:
        logging.error(f"Error creating tables: {e}")
        raise
    logging.info(f"{Config.SERVICE_NAME} started ({Config.ENVIRONMENT})")
    yield


production = Config.is_production()

app = FastAPI(
    title=Config.SERVICE_NAME,
    description="Administration API for a childcare-center network: centers, students, tuition billing and settings",
    version="1.0.0",
    docs_url=None if production else "/docs",
    redoc_url=None if production else "/redoc",
    openapi_url=None if production else "/openapi.json",
    lifespan=lifespan,
)

origins = [
    Config.FRONTEND_URL,
    "http://localhost:8080",
    "http://127.0.0.1:8080",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logging.info(f"{request.method} {request.url.path}")
    return await call_next(request)


@app.exception_handler(ReceivablesError)
async def receivables_error_handler(request: Request, exc: ReceivablesError):
    if isinstance(exc, ComputationError):
        logging.error(f"Computation error on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
        detail = "Internal Server Error" if production else exc.message
    else:
        logging.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        detail = exc.message
    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logging.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.get("/health", tags=["Root"])
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "service": Config.SERVICE_NAME,
    }


app.include_router(centers_fastapi.router, prefix="/api/v1/centers")
app.include_router(students_fastapi.router, prefix="/api/v1/students")
app.include_router(billing_fastapi.router, prefix="/api/v1/billing")
app.include_router(settings_fastapi.router, prefix="/api/v1/settings")


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"{Config.SERVICE_NAME}",
        "documentation": "/docs",
        "endpoints": [
            {"centers": "/api/v1/centers"},
            {"students": "/api/v1/students"},
            {"billing": "/api/v1/billing"},
            {"aging_report": "/api/v1/billing/aging-report"},
            {"settings": "/api/v1/settings"},
        ]
    }
