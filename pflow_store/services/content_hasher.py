"""Content identifiers for stored models.

A CID here is a CIDv1 with the ``raw`` codec over a sha2-256 multihash,
rendered in base58btc, so every identifier starts with ``zb2rh``. The hash
covers the exact bytes given: two encodings of the same model are two CIDs.
"""

from __future__ import annotations

from multiformats import CID, multihash

from ..errors import InvalidInputError

CID_VERSION = 1
CID_CODEC = "raw"
CID_BASE = "base58btc"
HASH_FUNCTION = "sha2-256"


def compute_cid(data: bytes) -> str:
    if not data:
        raise InvalidInputError("Cannot compute a CID for empty input")
    digest = multihash.digest(bytes(data), HASH_FUNCTION)
    return str(CID(CID_BASE, CID_VERSION, CID_CODEC, digest))


def compute_text_cid(text: str) -> str:
    """CID of a text blob as transmitted (its UTF-8 bytes)."""
    return compute_cid(text.encode("utf-8"))


def is_cid(value: str) -> bool:
    if not value:
        return False
    try:
        CID.decode(value)
    except (ValueError, KeyError):
        return False
    return True
