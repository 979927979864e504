from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .error import ClientError, ServerError
from textsafe.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from textsafe.adapter.services.in_memory_rate_limiter import InMemoryRateLimiter
from textsafe.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from textsafe.app.repositories.errors import StoreError
from textsafe.app.services.encryption_service import EncryptionService
from textsafe.app.services.password_hasher import PasswordHasher
from textsafe.app.services.rate_limiter import RateLimiter
from textsafe.domain.entities import ErrorCode
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_store_error(request: Request, exc: StoreError):
    error_dict = {"code": ErrorCode.STORE_FAILURE, "message": "Internal server error"}
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    error_dict = {"code": ErrorCode.VALIDATION_ERROR, "message": "Invalid input"}
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


@asynccontextmanager
async def lifespan(app: FastAPI):
    from textsafe.depends import create_db_and_tables

    await create_db_and_tables()
    logger.info("Database schema ready")
    yield


def create_app(
    ApplicationConfig,
    rate_limiter: RateLimiter = None,
    password_hasher: PasswordHasher = None,
    encryption_service: EncryptionService = None,
) -> FastAPI:
    app = FastAPI(title="TextSafe API", version="0.1.0", lifespan=lifespan)

    # Long-lived collaborators owned by the app, reached through dependencies
    app.state.config = ApplicationConfig
    app.state.rate_limiter = rate_limiter or InMemoryRateLimiter(
        max_tracked_keys=ApplicationConfig.RATE_LIMIT_MAX_TRACKED_KEYS
    )
    app.state.password_hasher = password_hasher or BcryptPasswordHasher(
        rounds=ApplicationConfig.BCRYPT_ROUNDS
    )
    app.state.encryption_service = encryption_service or EncryptionService(
        ApplicationConfig.ENCRYPTION_KEY
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)
    # Added last so it wraps everything else
    app.add_middleware(SecurityHeadersMiddleware)

    from textsafe.api.routes import auth, health_check, system, texts

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(texts.router, tags=["Texts"])
    app.include_router(system.router, tags=["System"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(StoreError, handle_store_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
