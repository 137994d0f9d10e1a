from __future__ import annotations

# Core database functionality
from .core import Storage

# Tables
from .models import metadata, validate_collection, zblob_table

# Zblob operations
from .zblobs import count_zblobs, create_or_retrieve, get_by_cid

__all__ = [
    # Core
    "Storage",
    # Tables
    "metadata",
    "validate_collection",
    "zblob_table",
    # Zblobs
    "count_zblobs",
    "create_or_retrieve",
    "get_by_cid",
]
