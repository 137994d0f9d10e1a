from __future__ import annotations

from .zblob import (
    Zblob,
    ZblobMetadata,
    deserialize_keywords,
    normalize_keywords,
    parse_keywords,
    serialize_keywords,
)

__all__ = [
    "Zblob",
    "ZblobMetadata",
    "deserialize_keywords",
    "normalize_keywords",
    "parse_keywords",
    "serialize_keywords",
]
