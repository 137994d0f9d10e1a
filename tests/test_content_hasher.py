from __future__ import annotations

import hashlib

import pytest
from multiformats import CID, multibase

from pflow_store.errors import InvalidInputError
from pflow_store.services.content_hasher import compute_cid, compute_text_cid, is_cid

KNOWN_MODEL_CID = "zb2rhjSDP7JbLBEjfeThBdnE2va1sTahmDkooKB9VYGD67tf5"


def test_compute_cid_is_deterministic(model_blob: str) -> None:
    first = compute_text_cid(model_blob)
    assert all(compute_text_cid(model_blob) == first for _ in range(5))


def test_compute_cid_matches_raw_sha256_cidv1() -> None:
    data = b'{"modelType": "petriNet"}'
    raw_cid = bytes([0x01, 0x55, 0x12, 0x20]) + hashlib.sha256(data).digest()

    assert compute_cid(data) == multibase.encode(raw_cid, "base58btc")


def test_compute_cid_uses_base58btc_raw_prefix(model_blob: str) -> None:
    cid = compute_text_cid(model_blob)

    assert cid.startswith("zb2rh")
    assert len(cid) == len(KNOWN_MODEL_CID)


def test_compute_cid_hashes_exact_bytes() -> None:
    assert compute_cid(b'{"a": 1}') != compute_cid(b'{"a":1}')
    assert compute_text_cid("abc+def") != compute_text_cid("abc def")


def test_compute_cid_rejects_empty_input() -> None:
    with pytest.raises(InvalidInputError):
        compute_cid(b"")
    with pytest.raises(InvalidInputError):
        compute_text_cid("")


def test_known_model_cid_is_raw_sha256_cidv1() -> None:
    """The published pflow CID for the inhibitor test model.

    The exact blob it was computed from is not available, so only its shape
    is pinned here; the hashing pipeline itself is checked against an
    independent sha256 in test_compute_cid_matches_raw_sha256_cidv1.
    """
    cid = CID.decode(KNOWN_MODEL_CID)

    assert cid.version == 1
    assert cid.codec.name == "raw"
    assert cid.hashfun.name == "sha2-256"
    assert len(cid.raw_digest) == 32


def test_is_cid() -> None:
    assert is_cid(KNOWN_MODEL_CID)
    assert is_cid(compute_cid(b"model"))
    assert not is_cid("")
    assert not is_cid("does-not-exist")
    # base58btc has no 0, O, I or l
    assert not is_cid("zb2rh0OIl")
