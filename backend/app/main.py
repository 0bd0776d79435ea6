"""Alternative-Data Credit Risk API - FastAPI Entry Point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

logger = logging.getLogger(__name__)

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.config import Settings, settings as default_settings
from app.database import Base, build_engine, build_session_factory
from app.middleware.error_capture import ErrorCaptureMiddleware
from app.models import ApplicantRecord  # noqa: F401  (registers tables on Base.metadata)
from app.api import applications
from app.services.risk_engine import InvalidInputError

SERVICE_NAME = "credit-risk-api"
VERSION = "0.1.0"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(settings.log_level)


def _lifespan_for(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the database engine; create tables on startup (dev only)."""
        engine = build_engine(settings.database_url, echo=settings.debug)
        app.state.session_factory = build_session_factory(engine)
        if settings.auto_create_tables:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        try:
            yield
        finally:
            await engine.dispose()

    return lifespan


# ── Security headers middleware ──────────────────────────────────
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds standard security headers to every response."""

    def __init__(self, app, environment: str = "development"):
        super().__init__(app)
        self.environment = environment

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if self.environment != "development":
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"
        return response


# ── Error envelopes ──────────────────────────────────────────────
async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={"success": False, "error": "; ".join(problems) or "Invalid request"},
    )


async def _invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning("Invalid applicant data on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"success": False, "error": str(exc)})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with explicitly supplied settings."""
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title="Alternative-Data Credit Risk API",
        description="Scores loan applicants from traditional and alternative data",
        version=VERSION,
        lifespan=_lifespan_for(settings),
    )
    app.state.settings = settings

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        enabled=settings.rate_limit_enabled,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(InvalidInputError, _invalid_input_handler)

    app.add_middleware(SlowAPIMiddleware)

    # Security headers
    app.add_middleware(SecurityHeadersMiddleware, environment=settings.environment)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Requested-With"],
    )

    # Error capture middleware (outermost, catches everything)
    app.add_middleware(ErrorCaptureMiddleware)

    # Routers
    app.include_router(
        applications.router,
        prefix=f"{settings.api_prefix}/applications",
        tags=["Applications"],
    )

    @app.get(f"{settings.api_prefix}/health")
    async def health_check():
        return {"status": "healthy", "service": SERVICE_NAME, "version": VERSION}

    return app


app = create_app()


def serve(settings: Optional[Settings] = None) -> None:
    """Run the API under uvicorn on the configured host and port."""
    import uvicorn

    settings = settings or default_settings
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    serve()
