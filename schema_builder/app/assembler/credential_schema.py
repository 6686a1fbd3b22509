"""
Credential schema assembly and self-addressing.

Execution order (strictly enforced):
    1. Metadata validation gate (no document is built on failure)
    2. Attributes-block template
    3. Outer schema template embedding the block
    4. Bottom-up self-addressing:
         a. attributes block  -> attributesSaid
         b. outer schema      -> said

The attributes block's SAID is part of the outer schema's digest input,
never the reverse. Changing outer-only fields (title, description, ...)
therefore never changes attributesSaid.

The pipeline is a pure function of its inputs. It holds no state between
calls and may be invoked concurrently.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from schema_builder.app.assembler.templates import (
    build_attributes_block,
    build_schema_envelope,
)
from schema_builder.app.said import (
    DEFAULT_DIGEST_CODE,
    ID_FIELD,
    MissingIdentifierField,
    MissingRequiredMetadata,
    placeholder,
    self_address_nested,
    verify_said,
)
from schema_builder.app.said.saidify import ROOT, DocumentPath
from schema_builder.app.schemas.credential_schema import (
    SchemaMetadata,
    SchemaResult,
    SchemaVerification,
)

logger = logging.getLogger(__name__)

# Location of the embedded attributes block inside the outer schema
ATTRIBUTES_BLOCK_PATH: DocumentPath = ("properties", "a", "oneOf", 1)


def validate_metadata(metadata: SchemaMetadata) -> None:
    """Raise MissingRequiredMetadata if title or credentialType is blank."""
    missing = []
    if not metadata.title.strip():
        missing.append("title")
    if not metadata.credential_type.strip():
        missing.append("credentialType")

    if missing:
        raise MissingRequiredMetadata(missing)


def assemble_schema_template(
    metadata: SchemaMetadata,
    code: str = DEFAULT_DIGEST_CODE,
) -> Dict[str, Any]:
    """
    Build the complete, not-yet-addressed schema document.

    Both identifier fields hold placeholders sized for ``code``.
    """
    said_placeholder = placeholder(code)

    block = build_attributes_block(metadata.attributes, said_placeholder)

    return build_schema_envelope(
        title=metadata.title,
        description=metadata.description,
        credential_type=metadata.credential_type,
        version=metadata.version,
        attributes_block=block,
        said_placeholder=said_placeholder,
    )


def build_credential_schema(
    metadata: SchemaMetadata,
    code: str = DEFAULT_DIGEST_CODE,
) -> SchemaResult:
    """
    Build a credential schema and derive its self-addressing identifiers.

    Raises:
        MissingRequiredMetadata: title or credentialType blank.
        UnsupportedAlgorithm, UnserializableValue, DigestComputationFailed:
            propagated unchanged from the digest engine.
    """
    validate_metadata(metadata)

    template = assemble_schema_template(metadata, code)

    schema, saids = self_address_nested(
        template,
        paths=(ATTRIBUTES_BLOCK_PATH, ROOT),
        field=ID_FIELD,
        code=code,
    )

    logger.debug(
        "credential_schema_built",
        extra={
            "said": saids[ROOT],
            "attributes_said": saids[ATTRIBUTES_BLOCK_PATH],
            "digest_code": code,
        },
    )

    return SchemaResult(
        schema=schema,
        said=saids[ROOT],
        attributesSaid=saids[ATTRIBUTES_BLOCK_PATH],
    )


def verify_credential_schema(
    schema: Dict[str, Any],
    code: str = DEFAULT_DIGEST_CODE,
) -> SchemaVerification:
    """
    Re-derive the SAIDs embedded in a published credential schema.

    The outer ``$id`` is always checked. The attributes block is checked
    when the schema embeds one at the usual location.

    Raises:
        MissingIdentifierField: the schema has no ``$id``.
        UnserializableValue: a field holds NaN, an infinity or another
            value with no canonical JSON form.
    """
    said_valid = verify_said(schema, field=ID_FIELD, code=code)

    block = _embedded_attributes_block(schema)
    block_said = None
    block_valid = None
    if block is not None:
        block_said = block.get(ID_FIELD)
        try:
            block_valid = verify_said(block, field=ID_FIELD, code=code)
        except MissingIdentifierField:
            block_valid = False

    return SchemaVerification(
        said=str(schema[ID_FIELD]),
        valid=said_valid,
        attributesSaid=block_said if isinstance(block_said, str) else None,
        attributesValid=block_valid,
    )


def _embedded_attributes_block(schema: Dict[str, Any]) -> Dict[str, Any] | None:
    target: Any = schema
    for step in ATTRIBUTES_BLOCK_PATH:
        try:
            target = target[step]
        except (KeyError, IndexError, TypeError):
            return None
    return target if isinstance(target, dict) else None
