import pytest

from schema_builder.app.said import (
    DIGEST_REGISTRY,
    DigestComputationFailed,
    UnsupportedAlgorithm,
    digest,
    encode,
    get_digest_entry,
    placeholder,
)


# Published BLAKE3 test vector for the empty input
BLAKE3_EMPTY = "af1349b9f5f9a1a6a0404dea36dcc9499bcb25c9adc112b7cc9a93cae41f3262"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def test_blake3_256_registry_entry_sizes():
    entry = get_digest_entry("E")

    assert entry.name == "Blake3_256"
    assert entry.raw_size == 32
    assert entry.full_size == 44


def test_only_the_selected_algorithm_is_registered():
    assert set(DIGEST_REGISTRY) == {"E"}


def test_unknown_code_is_rejected_everywhere():
    with pytest.raises(UnsupportedAlgorithm) as exc_info:
        digest(b"{}", "I")
    assert exc_info.value.code == "I"

    with pytest.raises(UnsupportedAlgorithm):
        encode(bytes(32), "I")

    with pytest.raises(UnsupportedAlgorithm):
        placeholder("I")


# ---------------------------------------------------------------------------
# Digest
# ---------------------------------------------------------------------------

def test_digest_matches_blake3_empty_vector():
    assert digest(b"", "E").hex() == BLAKE3_EMPTY


def test_digest_accepts_bytearray():
    assert digest(bytearray(b"abc"), "E") == digest(b"abc", "E")


def test_digest_rejects_text():
    with pytest.raises(TypeError):
        digest("not bytes", "E")


def test_digest_wraps_primitive_failure(monkeypatch):
    entry = DIGEST_REGISTRY["E"]

    def broken(data: bytes) -> bytes:
        raise MemoryError("exhausted")

    monkeypatch.setitem(
        DIGEST_REGISTRY,
        "E",
        entry.model_copy(update={"hasher": broken}),
    )

    with pytest.raises(DigestComputationFailed) as exc_info:
        digest(b"{}", "E")

    assert isinstance(exc_info.value.__cause__, MemoryError)


def test_digest_rejects_wrong_size_output(monkeypatch):
    entry = DIGEST_REGISTRY["E"]
    monkeypatch.setitem(
        DIGEST_REGISTRY,
        "E",
        entry.model_copy(update={"hasher": lambda data: b"short"}),
    )

    with pytest.raises(DigestComputationFailed):
        digest(b"{}", "E")


# ---------------------------------------------------------------------------
# CESR encoding
# ---------------------------------------------------------------------------

def test_encode_all_zero_digest():
    assert encode(bytes(32), "E") == "E" + "A" * 43


def test_encode_all_ones_digest():
    # prepad 0x00 + 0xffff -> "AP__", pad character dropped, code prepended
    assert encode(b"\xff" * 32, "E") == "EP" + "_" * 42


def test_encode_is_fixed_width_and_url_safe():
    for seed in (b"", b"a", b"credential", b"\x00" * 100):
        identifier = encode(digest(seed, "E"), "E")

        assert len(identifier) == 44
        assert identifier.startswith("E")
        assert "+" not in identifier and "/" not in identifier
        assert "=" not in identifier


def test_encode_rejects_wrong_raw_size():
    with pytest.raises(DigestComputationFailed):
        encode(bytes(31), "E")


def test_placeholder_matches_identifier_length():
    assert placeholder("E") == "#" * 44
    assert len(placeholder("E")) == len(encode(bytes(32), "E"))
