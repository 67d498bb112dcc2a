"""Structured error types for SimpleNoSQL."""

from __future__ import annotations


class SimpleNoSQLError(Exception):
    """Base error for all SimpleNoSQL errors."""


class ValidationError(SimpleNoSQLError):
    """Raised when an entity key is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class SerializationError(SimpleNoSQLError):
    """Raised when a payload cannot be serialized for storage."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Could not serialize entity data: {detail}")


class DeserializationError(SimpleNoSQLError):
    """Raised when a stored row cannot be turned back into a typed payload."""

    def __init__(self, bucket: str | None, entity_id: str | None, detail: str) -> None:
        self.bucket = bucket
        self.entity_id = entity_id
        self.detail = detail
        super().__init__(f"Could not deserialize entity '{bucket}/{entity_id}': {detail}")


class StorageIOError(SimpleNoSQLError):
    """Raised when the underlying SQLite engine fails."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage error during {operation}: {detail}")


class MigrationWarning(UserWarning):
    """Emitted when a schema reconciliation step fails and is skipped."""
