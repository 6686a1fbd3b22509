"""
Self-addressing of documents.

A self-addressing identifier (SAID) is computed over a document whose
identifier field holds a placeholder of exactly the final identifier's
length. The digest of that document is encoded and written back into
the same field. Because placeholder and identifier have the same length,
a verifier can reset the field, re-serialize and re-hash to check it.

Nested identifiers are handled strictly bottom-up: every sub-document is
addressed and written back into the working copy before any of its
ancestors is serialized.

Caller-owned documents are never mutated; all work happens on a deep
copy.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, Sequence, Tuple, Union

from schema_builder.app.said.canonical import serialize
from schema_builder.app.said.digest import digest, encode
from schema_builder.app.said.errors import (
    DigestComputationFailed,
    MissingIdentifierField,
)
from schema_builder.app.said.registry import (
    DEFAULT_DIGEST_CODE,
    DigestEntry,
    get_digest_entry,
)

# keripy's Saider dummy character
PLACEHOLDER_CHAR = "#"

ID_FIELD = "$id"

DocumentPath = Tuple[Union[str, int], ...]
ROOT: DocumentPath = ()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def placeholder(code: str = DEFAULT_DIGEST_CODE) -> str:
    """Return the placeholder string sized for ``code`` identifiers."""
    return PLACEHOLDER_CHAR * get_digest_entry(code).full_size


def format_path(path: Sequence[Union[str, int]]) -> str:
    """Render a document path as ``properties.a.oneOf[1]``."""
    rendered = ""
    for step in path:
        if isinstance(step, int):
            rendered += f"[{step}]"
        else:
            rendered = f"{rendered}.{step}" if rendered else str(step)
    return rendered


def _resolve(document: Dict[str, Any], path: DocumentPath, field: str) -> Dict[str, Any]:
    target: Any = document
    try:
        for step in path:
            target = target[step]
    except (KeyError, IndexError, TypeError) as exc:
        raise MissingIdentifierField(field, format_path(path)) from exc

    if not isinstance(target, dict) or field not in target:
        raise MissingIdentifierField(field, format_path(path))
    return target


def _compute_in_place(document: Dict[str, Any], field: str, entry: DigestEntry) -> str:
    """
    Write the placeholder into ``document[field]`` and return the SAID.

    The caller is responsible for writing the returned SAID back.
    """
    document[field] = PLACEHOLDER_CHAR * entry.full_size

    said = encode(digest(serialize(document), entry.code), entry.code)

    if len(said) != len(document[field]):
        raise DigestComputationFailed(
            f"Identifier length {len(said)} does not match placeholder "
            f"length {len(document[field])}"
        )
    return said


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------


def self_address(
    document: Dict[str, Any],
    field: str = ID_FIELD,
    code: str = DEFAULT_DIGEST_CODE,
) -> Tuple[Dict[str, Any], str]:
    """
    Compute and embed the SAID of a single document.

    Args:
        document: Template holding ``field`` (its current value is ignored).
        field: Name of the identifier field.
        code: Digest algorithm code.

    Returns:
        A new document with the SAID embedded, and the SAID itself.

    Raises:
        UnsupportedAlgorithm, UnserializableValue, DigestComputationFailed,
        MissingIdentifierField
    """
    entry = get_digest_entry(code)

    if not isinstance(document, dict) or field not in document:
        raise MissingIdentifierField(field)

    working = copy.deepcopy(document)
    said = _compute_in_place(working, field, entry)
    working[field] = said
    return working, said


def self_address_nested(
    document: Dict[str, Any],
    paths: Iterable[DocumentPath] = (ROOT,),
    field: str = ID_FIELD,
    code: str = DEFAULT_DIGEST_CODE,
) -> Tuple[Dict[str, Any], Dict[DocumentPath, str]]:
    """
    Self-address several nested sub-documents of one document.

    ``paths`` locate the sub-documents to address; ``()`` is the document
    itself. Deeper paths are always processed before shallower ones, so a
    descendant's SAID is part of its ancestors' digest input and never
    the other way round.

    Returns:
        The addressed document and a mapping of path -> SAID.
    """
    entry = get_digest_entry(code)

    ordered = sorted(dict.fromkeys(tuple(p) for p in paths), key=len, reverse=True)

    working = copy.deepcopy(document)
    saids: Dict[DocumentPath, str] = {}

    for path in ordered:
        target = _resolve(working, path, field)
        said = _compute_in_place(target, field, entry)
        target[field] = said
        saids[path] = said

    return working, saids


def compute_said(
    document: Dict[str, Any],
    field: str = ID_FIELD,
    code: str = DEFAULT_DIGEST_CODE,
) -> str:
    """Return the SAID ``document`` would receive, without embedding it."""
    return self_address(document, field=field, code=code)[1]


def verify_said(
    document: Dict[str, Any],
    field: str = ID_FIELD,
    code: str = DEFAULT_DIGEST_CODE,
) -> bool:
    """
    Check that ``document[field]`` is the SAID of ``document``.

    The field is reset to a same-length placeholder on a copy, the
    document is re-serialized and re-hashed, and the result compared.
    A stored value of the wrong length or type can never verify.
    """
    entry = get_digest_entry(code)

    if not isinstance(document, dict) or field not in document:
        raise MissingIdentifierField(field)

    stored = document[field]
    if not isinstance(stored, str) or len(stored) != entry.full_size:
        return False

    return compute_said(document, field=field, code=code) == stored
