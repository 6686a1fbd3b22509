from .canonical import serialize
from .digest import digest, encode
from .errors import (
    DigestComputationFailed,
    MissingIdentifierField,
    MissingRequiredMetadata,
    SchemaBuilderError,
    UnserializableValue,
    UnsupportedAlgorithm,
)
from .registry import DEFAULT_DIGEST_CODE, DIGEST_REGISTRY, get_digest_entry
from .saidify import (
    ID_FIELD,
    compute_said,
    placeholder,
    self_address,
    self_address_nested,
    verify_said,
)

__all__ = [
    "serialize",
    "digest",
    "encode",
    "SchemaBuilderError",
    "MissingRequiredMetadata",
    "UnserializableValue",
    "UnsupportedAlgorithm",
    "DigestComputationFailed",
    "MissingIdentifierField",
    "DEFAULT_DIGEST_CODE",
    "DIGEST_REGISTRY",
    "get_digest_entry",
    "ID_FIELD",
    "compute_said",
    "placeholder",
    "self_address",
    "self_address_nested",
    "verify_said",
]
