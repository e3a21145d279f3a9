"""FastAPI application entry point.

Application factory with provisioning lifespan, CORS, error envelopes, and
route registration.

To run:
    uvicorn sql_gateway.api.main:app --port 3001
or:
    python -m sql_gateway
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import RequestResponseEndpoint
from starlette.types import Receive, Scope, Send

from sql_gateway import __version__, messages
from sql_gateway.api.db.database import create_tables, make_session_factory, provision
from sql_gateway.api.routes import patients, sql
from sql_gateway.api.services.gateway import SqlGateway
from sql_gateway.config import Settings, load_settings
from sql_gateway.errors import GatewayError
from sql_gateway.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def bind_engine(app: FastAPI, engine: Engine) -> None:
    """Attach the shared engine and everything built on it to ``app.state``."""
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.gateway = SqlGateway(engine)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Runs on startup and shutdown:
    - Startup: Provision the database and table, build the shared engine
    - Shutdown: Dispose the engine if this app created it

    A provisioning failure propagates, so the server never starts listening
    without a usable pool.
    """
    settings: Settings = app.state.settings
    owns_engine = app.state.engine is None

    if owns_engine:
        bind_engine(app, provision(settings))
    else:
        create_tables(app.state.engine)

    logger.info("gateway_started", variant=settings.variant, cors=settings.cors_enabled)

    yield

    if owns_engine:
        app.state.engine.dispose()
    logger.info("gateway_stopped")


# ============================================================================
# Error Envelopes
# ============================================================================


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and known paths with an unsupported method are both "not found"
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(status.HTTP_404_NOT_FOUND, messages.ERR_NOT_FOUND)
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return error_response(status.HTTP_400_BAD_REQUEST, messages.ERR_INVALID_JSON)

    fields = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        fields.append(".".join(loc) or "body")
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        messages.ERR_VALIDATION.format(fields=", ".join(dict.fromkeys(fields))),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, messages.ERR_SERVER)


async def catch_unexpected_errors(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Outermost request boundary below CORS: any fault becomes a 500 envelope.

    Registered as middleware rather than an ``Exception`` handler so the
    response still passes back through the CORS layer.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return await handle_unexpected_error(request, exc)


# ============================================================================
# CORS Middleware
# ============================================================================


class PreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware that answers every OPTIONS request with a bodyless 204.

    The fixed allow-list goes out on every preflight; enforcing it is left
    to the browser.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "OPTIONS":
            headers = dict(self.preflight_headers)
            headers.setdefault("Access-Control-Allow-Origin", "*")
            response = Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)
            await response(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


# ============================================================================
# FastAPI Application
# ============================================================================


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """Build the gateway application.

    Args:
        settings: Runtime settings (defaults to the environment)
        engine: Pre-built engine to use instead of provisioning one. The
            bootstrap database step is skipped; the table is still ensured.

    Returns:
        FastAPI: Configured application
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="SQL Gateway",
        description="Verb-gated raw SQL over HTTP, plus a typed patient resource",
        version=__version__,
        # Fixed route table: no interactive docs or schema endpoints
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = None
    if engine is not None:
        bind_engine(app, engine)

    # Added first so it sits inside CORS: error envelopes carry CORS headers too
    app.middleware("http")(catch_unexpected_errors)

    if settings.cors_enabled:
        app.add_middleware(
            PreflightCORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
            max_age=600,
        )

    app.add_exception_handler(GatewayError, handle_gateway_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # Health check endpoint
    @app.get("/", response_class=PlainTextResponse, tags=["health"])
    async def health_check() -> str:
        """Health check endpoint for monitoring."""
        return messages.OK

    if settings.mounts_sql:
        app.include_router(sql.router, tags=["sql"])
    if settings.mounts_patients:
        app.include_router(patients.router, tags=["patients"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: configure logging and serve the module-level app."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    uvicorn.run(
        app,
        host=settings.listen_host,
        port=settings.listen_port,
        log_level=settings.log_level.lower(),
    )


# ============================================================================
# Development Server
# ============================================================================

if __name__ == "__main__":
    run()
