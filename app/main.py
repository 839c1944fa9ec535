"""
FastAPI application factory.

Creates and configures the FastAPI application instance and assembles the
process-wide collaborators (token codec, authentication gate, mailer).
"""

import datetime
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.auth_gate import AuthenticationGate
from app.core.config import settings
from app.core.exceptions import ServiceError, ValidationFailure
from app.core.logging_config import setup_logging
from app.core.security import TokenCodec
from app.services.email_service import EmailService

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s %s starting", settings.PROJECT_NAME, settings.VERSION)
    yield
    # Let queued emails go out before the process exits
    app.state.email_service.shutdown(wait=True)
    logger.info("%s stopped", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Resume builder backend: accounts, authentication and resume storage.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers)

# Composition root
token_codec = TokenCodec(settings.SECRET_KEY, algorithm=settings.ALGORITHM,
                         expires_delta=datetime.timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
app.state.token_codec = token_codec
app.state.auth_gate = AuthenticationGate(token_codec)
app.state.email_service = EmailService.from_settings(settings)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code},
                        headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=ValidationFailure.status_code,
                        content={"detail": jsonable_encoder(exc.errors()), "code": ValidationFailure.code})


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "Resume Builder API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "resume-builder-api",
        "version": settings.VERSION
    }
