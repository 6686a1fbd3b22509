"""
Credential schema request and response contracts.

Defines the structures exchanged between the schema assembler and its
collaborators (the HTTP layer and the editing UI). Wire names follow the
UI's camelCase convention; Python attribute names are snake_case.
"""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class AttributeType(str, Enum):
    """JSON Schema primitive types an attribute may declare."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class AttributeSpec(BaseModel):
    """
    One credential attribute row as edited by the user.

    Rows with a blank name are treated as not-yet-specified and are
    skipped during assembly rather than rejected.
    """

    name: str = Field(
        "",
        description="Attribute property name. Blank rows are ignored.",
    )

    type: AttributeType = Field(
        AttributeType.STRING,
        description="JSON Schema type of the attribute value.",
    )

    description: str = Field(
        "",
        description=(
            "Human-readable description. Defaults to "
            "'<name> attribute' when blank."
        ),
    )

    required: bool = Field(
        False,
        description="Whether the attribute is listed in the block's required set.",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )


class SchemaMetadata(BaseModel):
    """
    Schema build request.

    title and credentialType are mandatory in substance but accepted
    blank here, so that the assembler can report MissingRequiredMetadata
    with a single, transport-independent message.
    """

    title: str = ""
    description: str = ""
    credential_type: str = Field("", alias="credentialType")
    version: str = ""
    attributes: List[AttributeSpec] = Field(default_factory=list)

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class SchemaResult(BaseModel):
    """
    Fully self-addressed credential schema.

    Constructed once per request and never retained by the core. The
    schema document's key order is significant for re-verification and
    is preserved through serialization.
    """

    schema_document: Dict[str, Any] = Field(..., alias="schema")
    said: str
    attributes_said: str = Field(..., alias="attributesSaid")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )


class SchemaVerification(BaseModel):
    """Outcome of re-deriving the SAIDs embedded in a schema document."""

    said: str
    valid: bool
    attributes_said: str | None = Field(None, alias="attributesSaid")
    attributes_valid: bool | None = Field(None, alias="attributesValid")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )
