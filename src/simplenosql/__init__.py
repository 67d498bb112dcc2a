"""SimpleNoSQL: bucket/entity document store on top of SQLite."""

__version__ = "0.1.0"

from simplenosql.config import DATABASE_NAME, DATABASE_VERSION, StoreConfig
from simplenosql.errors import (
    DeserializationError,
    MigrationWarning,
    SerializationError,
    SimpleNoSQLError,
    StorageIOError,
    ValidationError,
)
from simplenosql.migration import MigrationRegistry, MigrationStep, default_migrations
from simplenosql.serialization import Deserializer, JsonDeserializer, JsonSerializer, Serializer
from simplenosql.storage import StorageEngine, open_engine
from simplenosql.tasks import QueryBuilder, SimpleNoSQL
from simplenosql.types import (
    Entity,
    Filter,
    IdentifiedModel,
    IdentityAssignable,
    PredicateFilter,
    where,
)

__all__ = [
    "__version__",
    "DATABASE_NAME",
    "DATABASE_VERSION",
    "StoreConfig",
    "Entity",
    "Filter",
    "PredicateFilter",
    "where",
    "IdentityAssignable",
    "IdentifiedModel",
    "Serializer",
    "Deserializer",
    "JsonSerializer",
    "JsonDeserializer",
    "MigrationRegistry",
    "MigrationStep",
    "default_migrations",
    "StorageEngine",
    "open_engine",
    "SimpleNoSQL",
    "QueryBuilder",
    "SimpleNoSQLError",
    "ValidationError",
    "SerializationError",
    "DeserializationError",
    "StorageIOError",
    "MigrationWarning",
]
