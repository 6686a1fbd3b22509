import sys
import logging

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from importlib.metadata import version, PackageNotFoundError

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from schema_builder.app.api.routes import router as schemas_router
from schema_builder.app.core.config import get_settings
from schema_builder.app.said.errors import (
    MissingIdentifierField,
    MissingRequiredMetadata,
    SchemaBuilderError,
)

logger = logging.getLogger("schema_builder.main")

SERVICE_NAME = "schema-builder"

# Core failures caused by the request itself; everything else is a 500
CLIENT_ERRORS = (MissingRequiredMetadata, MissingIdentifierField)


def get_app_version() -> str:
    """
    Resolve application version deterministically.

    Falls back to the source-tree version when not installed.
    """
    try:
        return version("credential-schema-builder")
    except PackageNotFoundError:
        return "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Guarantees:
    - Fail-fast startup if configuration is invalid
    - No per-process mutable state beyond immutable settings
    """
    logger.info(
        "schema_builder_startup_begin",
        extra={
            "service": SERVICE_NAME,
            "version": get_app_version(),
        },
    )

    # ------------------------------------------------------------------
    # Load and validate configuration (FAIL FAST)
    # ------------------------------------------------------------------
    try:
        settings = get_settings()
    except Exception:
        logger.exception("invalid_schema_builder_configuration")
        raise

    app.state.settings = settings

    logger.info(
        "schema_builder_ready",
        extra={
            "digest_code": settings.digest_code,
            "max_attributes": settings.max_attributes,
        },
    )

    try:
        yield
    finally:
        logger.info("schema_builder_shutdown")


async def schema_builder_error_handler(
    request: Request,
    exc: SchemaBuilderError,
) -> JSONResponse:
    """
    Map core error kinds to HTTP status codes.

    The core only classifies and describes failures; the status code and
    the response envelope are decided here.
    """
    if isinstance(exc, CLIENT_ERRORS):
        logger.warning(
            "schema_request_rejected",
            extra={
                "error_kind": type(exc).__name__,
                "path": request.url.path,
            },
        )
        status_code = 400
    else:
        logger.error(
            "schema_computation_failed",
            exc_info=exc,
            extra={
                "error_kind": type(exc).__name__,
                "path": request.url.path,
            },
        )
        status_code = 500

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
        },
    )


def create_app() -> FastAPI:
    """
    Application factory for the Schema Builder service.
    """
    app = FastAPI(
        title="Credential Schema Builder",
        description=(
            "Assembles verifiable-credential JSON schemas and embeds "
            "their self-addressing identifiers (SAIDs)."
        ),
        version=get_app_version(),
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SchemaBuilderError, schema_builder_error_handler)

    app.include_router(schemas_router, prefix="/api")

    @app.get(
        "/api/health",
        tags=["Monitoring"],
        summary="Liveness probe",
    )
    def health_check() -> JSONResponse:
        """
        Verifies that the runtime is alive.

        NOTE:
        - Does NOT perform SAID computation
        """
        return JSONResponse(
            content={
                "status": "ok",
                "service": SERVICE_NAME,
                "version": app.version,
                "runtime": f"python {sys.version.split()[0]}",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

    return app


app = create_app()
