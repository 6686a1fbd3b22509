"""
Credential schema document templates.

Templates are built fresh on every call and returned as plain ordered
dicts. Key order here IS the canonical field order of the published
schema; reordering any literal below changes every identifier derived
from it.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from schema_builder.app.said import ID_FIELD
from schema_builder.app.schemas.credential_schema import AttributeSpec

JSON_SCHEMA_DIALECT = "http://json-schema.org/draft-07/schema#"

DEFAULT_TITLE = "Untitled Credential"
DEFAULT_VERSION = "1.0.0"

ATTRIBUTES_BLOCK_DESCRIPTION = "Attributes block"

# Fixed envelope fields every credential must carry
ENVELOPE_REQUIRED = ["i", "ri", "s", "d"]

# Fixed attributes-block fields
BLOCK_REQUIRED = ["i", "dt"]


def _fixed_block_properties() -> Dict[str, Any]:
    return {
        "i": {
            "description": "Issuee AID",
            "type": "string",
        },
        "dt": {
            "description": "Issuance date time",
            "type": "string",
            "format": "date-time",
        },
    }


def build_attributes_block(
    attributes: Iterable[AttributeSpec],
    said_placeholder: str,
) -> Dict[str, Any]:
    """
    Build the attributes-block template.

    Attributes whose name is blank after trimming are skipped. A later
    attribute with the same name replaces the earlier definition in place
    but is listed in ``required`` only once.
    """
    properties = _fixed_block_properties()
    required: List[str] = list(BLOCK_REQUIRED)

    for attr in attributes:
        if not attr.name.strip():
            continue

        properties[attr.name] = {
            "description": attr.description or f"{attr.name} attribute",
            "type": attr.type.value,
        }
        if attr.required and attr.name not in required:
            required.append(attr.name)

    return {
        ID_FIELD: said_placeholder,
        "description": ATTRIBUTES_BLOCK_DESCRIPTION,
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
        "required": required,
    }


def build_schema_envelope(
    *,
    title: str,
    description: str,
    credential_type: str,
    version: str,
    attributes_block: Dict[str, Any],
    said_placeholder: str,
) -> Dict[str, Any]:
    """
    Build the outer credential schema template around an attributes block.

    The block becomes the second ``oneOf`` alternative of property ``a``;
    the first alternative references the block by its SAID instead.
    """
    return {
        ID_FIELD: said_placeholder,
        "$schema": JSON_SCHEMA_DIALECT,
        "title": title or DEFAULT_TITLE,
        "description": description or "",
        "type": "object",
        "credentialType": credential_type or "",
        "version": version or DEFAULT_VERSION,
        "properties": {
            "v": {
                "description": "Version",
                "type": "string",
            },
            "d": {
                "description": "Credential SAID",
                "type": "string",
            },
            "u": {
                "description": "One time use nonce",
                "type": "string",
            },
            "i": {
                "description": "Issuee AID",
                "type": "string",
            },
            "ri": {
                "description": "Credential status registry",
                "type": "string",
            },
            "s": {
                "description": "Schema SAID",
                "type": "string",
            },
            "a": {
                "oneOf": [
                    {
                        "description": "Attributes block SAID",
                        "type": "string",
                    },
                    attributes_block,
                ],
            },
        },
        "additionalProperties": False,
        "required": list(ENVELOPE_REQUIRED),
    }
