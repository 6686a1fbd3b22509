"""
Cryptographic primitives for self-addressing identifiers.

This module provides the low-level operations used by the assembler:

- Digesting canonical bytes with a registered algorithm
- Encoding a raw digest as a fixed-length CESR identifier string

Explicit non-scope:
- Canonicalization or serialization
- Placeholder handling or document mutation

IMPORTANT DESIGN RULE:
- Canonicalization MUST occur outside this module.
- This module hashes bytes, and bytes only.
"""

import base64
from typing import Union

from schema_builder.app.said.errors import DigestComputationFailed
from schema_builder.app.said.registry import get_digest_entry


def digest(canonical_bytes: Union[bytes, bytearray], code: str) -> bytes:
    """
    Compute the raw digest of canonical bytes.

    Args:
        canonical_bytes:
            Canonical byte representation of a document.
        code:
            CESR derivation code of the digest algorithm (e.g. ``E``).

    Returns:
        Raw digest bytes of the registered size.

    Raises:
        UnsupportedAlgorithm: if ``code`` is not registered.
        DigestComputationFailed: if the primitive fails or returns a
            digest of the wrong size.
    """
    if not isinstance(canonical_bytes, (bytes, bytearray)):
        raise TypeError(
            "digest expects canonical bytes, "
            f"got {type(canonical_bytes).__name__}"
        )

    entry = get_digest_entry(code)

    try:
        raw = entry.hasher(bytes(canonical_bytes))
    except Exception as exc:
        raise DigestComputationFailed(
            f"{entry.name} digest computation failed: {exc}"
        ) from exc

    if len(raw) != entry.raw_size:
        raise DigestComputationFailed(
            f"{entry.name} produced {len(raw)} bytes, "
            f"expected {entry.raw_size}"
        )

    return raw


def encode(raw: Union[bytes, bytearray], code: str) -> str:
    """
    Encode a raw digest as a CESR identifier.

    The raw bytes are left-padded with zero bytes to a multiple of three,
    base64url-encoded, and the characters covering the pad are replaced
    by the derivation code. A constant-size digest therefore always
    yields a constant-size identifier.

    Example (Blake3-256): 32 raw bytes -> ``E`` + 43 characters.
    """
    entry = get_digest_entry(code)

    if len(raw) != entry.raw_size:
        raise DigestComputationFailed(
            f"Cannot encode {len(raw)} bytes as {entry.name}: "
            f"expected {entry.raw_size}"
        )

    pad_size = (3 - (len(raw) % 3)) % 3
    b64 = base64.urlsafe_b64encode(bytes(pad_size) + bytes(raw)).decode("ascii")
    identifier = entry.code + b64[pad_size:]

    if len(identifier) != entry.full_size:
        raise DigestComputationFailed(
            f"Encoded {entry.name} identifier has {len(identifier)} "
            f"characters, expected {entry.full_size}"
        )

    return identifier
