"""Configuration for the SimpleNoSQL storage engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from simplenosql.migration import MigrationRegistry, default_migrations
from simplenosql.serialization import Deserializer, JsonDeserializer, JsonSerializer, Serializer

DATABASE_NAME = "simplenosql.db"
DATABASE_VERSION = 3


@dataclass
class StoreConfig:
    """Explicit configuration passed to a StorageEngine at construction.

    ``on_deserialization_error`` selects what a query does when one row cannot
    be deserialized: ``"raise"`` aborts the whole query with a
    DeserializationError, ``"skip"`` logs the row and leaves it out.
    """

    db_path: str = DATABASE_NAME
    serializer: Serializer = field(default_factory=JsonSerializer)
    deserializer: Deserializer = field(default_factory=JsonDeserializer)
    schema_version: int = DATABASE_VERSION
    busy_timeout_s: float = 10.0
    on_deserialization_error: Literal["raise", "skip"] = "raise"
    max_workers: int = 4
    migrations: MigrationRegistry = field(default_factory=default_migrations)

    def __post_init__(self) -> None:
        if self.on_deserialization_error not in ("raise", "skip"):
            raise ValueError(
                "on_deserialization_error must be 'raise' or 'skip', "
                f"got {self.on_deserialization_error!r}"
            )
        if self.schema_version < 1:
            raise ValueError(f"schema_version must be >= 1, got {self.schema_version}")
