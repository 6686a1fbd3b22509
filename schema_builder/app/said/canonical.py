"""
Canonical serialization of self-addressed documents.

Documents are serialized as compact UTF-8 JSON with keys in insertion
order. Keys are NOT sorted: the field order fixed by a template is part
of the identifier's input, and verifiers re-serialize in the same order
to check an identifier. This is the same byte layout keripy's
Saider.saidify produces for JSON documents.

IMPORTANT DESIGN RULE:
- This module produces bytes, and bytes only.
- Hashing and encoding happen in digest.py.
"""

from __future__ import annotations

import json
import math
from typing import Any, Mapping

from schema_builder.app.said.errors import UnserializableValue


def _join_path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def _check_representable(value: Any, path: str) -> None:
    """
    Walk ``value`` and raise UnserializableValue at the first field the
    canonical form cannot represent.
    """
    # bool is a subclass of int and passes here too
    if value is None or isinstance(value, (str, int)):
        return

    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnserializableValue(path, value)
        return

    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnserializableValue(_join_path(path, repr(key)), key)
            _check_representable(item, _join_path(path, key))
        return

    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _check_representable(item, f"{path}[{index}]")
        return

    raise UnserializableValue(path, value)


def serialize(document: Mapping[str, Any]) -> bytes:
    """
    Serialize a document to its canonical byte representation.

    Raises:
        UnserializableValue: if any field holds a value outside the JSON
            data model (including NaN and infinities). The error names
            the offending field path.
    """
    _check_representable(document, "")

    return json.dumps(
        document,
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    ).encode("utf-8")
