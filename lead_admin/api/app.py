from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from lead_admin.adapter.services.geo_lookup import GeoLookupCache
from lead_admin.adapter.services.notification_service import LoggingNotificationService
from lead_admin.api.middleware.activity_tracker import ActivityTrackerMiddleware
from lead_admin.api.middleware.rate_limit import RateLimitMiddleware
from lead_admin.api.middleware.request_logging import RequestLoggingMiddleware
from lead_admin.api.utils.jwt import SessionTokenCodec
from lead_admin.app.security import AuthenticationGate
from lead_admin.app.services.activity_recorder import ActivityRecorder
from lead_admin.libs.result import Error
from .error import ClientError, ServerError, error_body
import logging

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.base_error))


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(Error(exc.base_error.code, "Internal server error")),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in jsonable_encoder(exc.errors())
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(Error("VALIDATION_ERROR", "Validation failed", details)),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    code = _STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(Error(code, str(exc.detail))),
        headers=getattr(exc, "headers", None),
    )


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Lead Admin API", version="0.1.0")

    # Shared services, configured once
    codec = SessionTokenCodec(
        secret=ApplicationConfig.JWT_SECRET,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
        expires_in=timedelta(hours=ApplicationConfig.JWT_EXPIRES_HOURS),
    )
    geo_lookup = GeoLookupCache(
        url_template=ApplicationConfig.GEO_LOOKUP_URL,
        timeout=ApplicationConfig.GEO_LOOKUP_TIMEOUT,
        ttl_seconds=ApplicationConfig.GEO_CACHE_TTL_SECONDS,
        enabled=ApplicationConfig.GEO_LOOKUP_ENABLED,
    )

    from lead_admin.depends import unit_of_work_scope

    app.state.config = ApplicationConfig
    app.state.token_codec = codec
    app.state.auth_gate = AuthenticationGate(codec)
    app.state.activity_recorder = ActivityRecorder(
        uow_factory=unit_of_work_scope,
        geo_lookup=geo_lookup,
        max_body_size=ApplicationConfig.AUDIT_MAX_BODY_SIZE,
        enabled=ApplicationConfig.ACTIVITY_TRACKING_ENABLED,
    )
    app.state.notifier = LoggingNotificationService(ApplicationConfig.NOTIFICATION_EMAIL)

    # Last added runs first: CORS, logging, rate limit, activity tracking
    app.add_middleware(ActivityTrackerMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        per_minute=ApplicationConfig.RATE_LIMIT_PER_MINUTE,
        enabled=ApplicationConfig.RATE_LIMIT_ENABLED,
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from lead_admin.api.routes import company, health_check, investor_admin, investor_form, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(user.router, prefix=ApplicationConfig.API_PREFIX, tags=["User"])
    app.include_router(company.router, prefix=ApplicationConfig.API_PREFIX, tags=["Company"])
    app.include_router(
        investor_admin.router, prefix=ApplicationConfig.API_PREFIX, tags=["Investor Admin"]
    )
    app.include_router(
        investor_form.router, prefix=ApplicationConfig.API_PREFIX, tags=["Investor Form"]
    )

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

    return app
