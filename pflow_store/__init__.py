"""pflow_store: content-addressed storage and serving for pflow models."""

from pflow_store.db import Storage
from pflow_store.errors import InvalidInputError, PflowStoreError, StorageError
from pflow_store.models import Zblob, ZblobMetadata

__all__ = [
    "InvalidInputError",
    "PflowStoreError",
    "Storage",
    "StorageError",
    "Zblob",
    "ZblobMetadata",
]
