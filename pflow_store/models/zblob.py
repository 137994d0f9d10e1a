from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional


def normalize_keywords(keywords: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Strip, drop empties and de-duplicate keywords while keeping their order."""
    if not keywords:
        return ()
    seen: dict[str, None] = {}
    for keyword in keywords:
        cleaned = str(keyword).strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


def parse_keywords(raw: Optional[str]) -> tuple[str, ...]:
    """Parse a comma-separated keyword string (as sent in a query string)."""
    if not raw:
        return ()
    return normalize_keywords(raw.split(","))


def serialize_keywords(keywords: tuple[str, ...]) -> str:
    return json.dumps(list(keywords)) if keywords else ""


def deserialize_keywords(raw: Optional[str]) -> tuple[str, ...]:
    if not raw:
        return ()
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return ()
    if not isinstance(parsed, list):
        return ()
    return normalize_keywords(parsed)


@dataclass(frozen=True)
class ZblobMetadata:
    """Descriptive fields supplied alongside a stored model."""

    title: str = ""
    description: str = ""
    keywords: tuple[str, ...] = field(default_factory=tuple)
    referrer: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", normalize_keywords(self.keywords))


@dataclass(frozen=True)
class Zblob:
    """An immutable stored record: the encoded model, its CID and metadata."""

    id: int
    cid: str
    payload: str
    metadata: ZblobMetadata = field(default_factory=ZblobMetadata)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Zblob:
        return cls(
            id=row["id"],
            cid=row["cid"],
            payload=row["payload"],
            metadata=ZblobMetadata(
                title=row["title"] or "",
                description=row["description"] or "",
                keywords=deserialize_keywords(row["keywords"]),
                referrer=row["referrer"] or "",
            ),
        )
