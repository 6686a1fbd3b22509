"""
Digest algorithm registry.

This module defines the set of digest algorithms that may be used to
derive self-addressing identifiers. Each entry explicitly binds together:

- a CESR derivation code (the identifier's leading selector character)
- the raw digest size in bytes
- the full encoded identifier size in characters
- the hashing primitive

Placeholder sizing, digest length checks and encoding all read from this
table. Adding an algorithm is a data change here, not a logic change
elsewhere.
"""

from typing import Callable, Dict

import blake3
from pydantic import BaseModel, ConfigDict

from schema_builder.app.said.errors import UnsupportedAlgorithm


def _blake3_256(data: bytes) -> bytes:
    return blake3.blake3(data).digest()


class DigestEntry(BaseModel):
    """
    Declarative description of a digest algorithm.

    full_size is the length of the encoded identifier, code included.
    It is also the exact length of the placeholder written into the
    identifier field before hashing.
    """

    code: str
    name: str
    raw_size: int
    full_size: int
    hasher: Callable[[bytes], bytes]

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )


DEFAULT_DIGEST_CODE = "E"


DIGEST_REGISTRY: Dict[str, DigestEntry] = {
    "E": DigestEntry(
        code="E",
        name="Blake3_256",
        raw_size=32,
        full_size=44,
        hasher=_blake3_256,
    ),
}


def get_digest_entry(code: str) -> DigestEntry:
    """Return the registry entry for ``code`` or raise UnsupportedAlgorithm."""
    entry = DIGEST_REGISTRY.get(code)
    if entry is None:
        raise UnsupportedAlgorithm(code)
    return entry
