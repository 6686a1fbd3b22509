"""
Error classification for SAID computation and schema assembly.

Every failure raised by the core is a SchemaBuilderError subclass.
The core only classifies and describes failures; mapping them to
user-facing messages and HTTP status codes is the transport's job.
"""

from __future__ import annotations

from typing import Any


class SchemaBuilderError(Exception):
    """Base class for all core failures."""


class MissingRequiredMetadata(SchemaBuilderError):
    """Title or credential type is blank after trimming."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(
            f"Required schema metadata missing: {', '.join(self.fields)}"
        )


class UnserializableValue(SchemaBuilderError):
    """A document field holds a value the canonicalizer cannot represent."""

    def __init__(self, field_path: str, value: Any) -> None:
        self.field_path = field_path
        self.value_type = type(value).__name__
        super().__init__(
            f"Field '{field_path or '<root>'}' holds an unserializable "
            f"value of type {self.value_type}"
        )


class UnsupportedAlgorithm(SchemaBuilderError):
    """No registry entry exists for the requested digest code."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unsupported digest algorithm code '{code}'")


class DigestComputationFailed(SchemaBuilderError):
    """The hashing primitive failed or produced an unexpected digest."""


class MissingIdentifierField(SchemaBuilderError):
    """The document template has no identifier field to self-address."""

    def __init__(self, field: str, location: str = "") -> None:
        self.field = field
        self.location = location
        where = f" at '{location}'" if location else ""
        super().__init__(
            f"Document{where} has no identifier field '{field}'"
        )
