"""Typed errors for pflow_store."""


class PflowStoreError(Exception):
    """Base exception for all pflow_store errors."""


class InvalidInputError(PflowStoreError, ValueError):
    """Raised when a hasher, codec or store call is given degenerate input."""


class StorageError(PflowStoreError):
    """Raised when the persistent store fails (I/O, database or lock timeout)."""

    def __init__(self, operation: str, collection: str, reason: str) -> None:
        self.operation = operation
        self.collection = collection
        self.reason = reason
        super().__init__(f"{operation} on {collection!r} failed: {reason}")
