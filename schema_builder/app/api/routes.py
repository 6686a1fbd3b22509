"""
Credential schema endpoints.

Clients supply schema metadata only. Template assembly, canonicalization,
hashing and identifier embedding are performed exclusively by this
service. Core failures propagate as SchemaBuilderError subclasses and are
mapped to status codes by the handler registered in main.py.
"""

import logging
import uuid
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Response, status
from pydantic import BaseModel

from schema_builder.app.assembler.credential_schema import (
    build_credential_schema,
    verify_credential_schema,
)
from schema_builder.app.core.config import Settings, get_settings
from schema_builder.app.said.errors import UnserializableValue
from schema_builder.app.schemas.credential_schema import (
    SchemaMetadata,
    SchemaResult,
    SchemaVerification,
)

logger = logging.getLogger("schema_builder.api")

router = APIRouter(tags=["Credential Schemas"])


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


class SchemaBuildResponse(BaseModel):
    success: bool = True
    data: SchemaResult


class SchemaVerifyResponse(BaseModel):
    success: bool = True
    data: SchemaVerification


# =============================================================================
# Dependency providers
# =============================================================================

def get_correlation_id(
    x_correlation_id: Annotated[
        Optional[str],
        Header(description="Request trace ID"),
    ] = None,
) -> str:
    """Extract or generate a correlation ID for end-to-end traceability."""
    if x_correlation_id and len(x_correlation_id) > 128:
        return str(uuid.uuid4())
    return x_correlation_id or str(uuid.uuid4())


# =============================================================================
# POST /schemas
# =============================================================================

@router.post(
    "/schemas",
    response_model=SchemaBuildResponse,
    summary="Build a self-addressed credential schema",
    responses={
        400: {"description": "Title or credential type missing"},
        413: {"description": "Too many attribute rows"},
        500: {"description": "SAID computation failure"},
    },
)
def create_schema(
    metadata: SchemaMetadata,
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
) -> SchemaBuildResponse:
    """
    Assemble the credential schema and embed its SAIDs.

    The attributes block is self-addressed first and embedded into the
    schema, then the schema itself is self-addressed. Identical requests
    always produce identical identifiers.
    """
    response.headers["X-Correlation-ID"] = correlation_id

    if len(metadata.attributes) > settings.max_attributes:
        logger.warning(
            "attribute_limit_exceeded",
            extra={
                "attribute_count": len(metadata.attributes),
                "max_attributes": settings.max_attributes,
                "trace_id": correlation_id,
            },
        )
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=(
                f"At most {settings.max_attributes} attribute rows "
                "are accepted per schema."
            ),
            headers={"X-Correlation-ID": correlation_id},
        )

    result = build_credential_schema(metadata, code=settings.digest_code)

    logger.info(
        "schema_created",
        extra={
            "said": result.said,
            "attributes_said": result.attributes_said,
            "trace_id": correlation_id,
        },
    )

    return SchemaBuildResponse(data=result)


# =============================================================================
# POST /schemas/verify
# =============================================================================

@router.post(
    "/schemas/verify",
    response_model=SchemaVerifyResponse,
    summary="Verify the SAIDs embedded in a credential schema",
    responses={
        400: {"description": "Schema has no $id field"},
        422: {"description": "Schema holds a value with no canonical JSON form"},
    },
)
def verify_schema(
    schema: Annotated[Dict[str, Any], Body(...)],
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
) -> SchemaVerifyResponse:
    """
    Re-derive the schema's SAIDs from its own content.

    The request body must be the schema exactly as published: key order
    is part of the digest input.
    """
    response.headers["X-Correlation-ID"] = correlation_id

    try:
        verification = verify_credential_schema(schema, code=settings.digest_code)
    except UnserializableValue as exc:
        # NaN and Infinity survive JSON decoding but have no canonical form
        logger.warning(
            "unserializable_schema_rejected",
            extra={
                "field_path": exc.field_path,
                "trace_id": correlation_id,
            },
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
            headers={"X-Correlation-ID": correlation_id},
        ) from exc

    logger.info(
        "schema_verified",
        extra={
            "said": verification.said,
            "valid": verification.valid,
            "attributes_valid": verification.attributes_valid,
            "trace_id": correlation_id,
        },
    )

    return SchemaVerifyResponse(data=verification)
