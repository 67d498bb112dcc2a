"""SQLite-backed storage engine mapping (bucket, entity id) keys to serialized payloads.

The store is a NoSQL-style document API, but it is backed by a single SQLite
table. Callers never write SQL: documents are addressed by bucket and entity
id, and SQLite supplies the indexing, the uniqueness constraint and the
atomic replace-on-conflict upsert.
"""

from __future__ import annotations

import sqlite3
import threading
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager, nullcontext
from typing import Any, Callable, TypeVar, Union

from simplenosql.config import StoreConfig
from simplenosql.contract import (
    COLUMN_BUCKET_ID,
    COLUMN_DATA,
    COLUMN_ENTITY_ID,
    SQL_CREATE_ENTRIES,
    SQL_DELETE_ENTRIES,
    TABLE_NAME,
)
from simplenosql.errors import (
    DeserializationError,
    SerializationError,
    SimpleNoSQLError,
    StorageIOError,
    ValidationError,
)
from simplenosql.logging_config import get_logger
from simplenosql.types import Entity, Filter, IdentityAssignable, PredicateFilter

T = TypeVar("T")

FilterLike = Union[Filter[Any], Callable[[Entity[Any]], bool]]

logger = get_logger(__name__)

MEMORY_PATH = ":memory:"


def _as_filter(flt: FilterLike | None) -> Filter[Any] | None:
    """Normalize a Filter or plain predicate; None means include everything."""
    if flt is None:
        return None
    if isinstance(flt, Filter):
        return flt
    if callable(flt):
        return PredicateFilter(flt)
    raise TypeError(f"Expected a Filter or callable, got {type(flt).__name__}")


def _validate_key(entity: Entity[Any]) -> tuple[str, str]:
    bucket = getattr(entity, "bucket", None)
    entity_id = getattr(entity, "id", None)
    if bucket is None or entity_id is None:
        raise ValidationError(
            f"Cannot save entity without bucket and id (bucket={bucket!r}, id={entity_id!r})"
        )
    if not isinstance(bucket, str) or not isinstance(entity_id, str):
        raise ValidationError(
            f"Entity bucket and id must be strings, got {type(bucket).__name__} "
            f"and {type(entity_id).__name__}"
        )
    return bucket, entity_id


class StorageEngine:
    """Document store over one SQLite table with replace-on-conflict upserts.

    Every operation opens its own connection and closes it before returning.
    Writers inside one process are additionally serialized by a per-engine lock;
    an in-memory store takes the same lock for reads too.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self.config = config or StoreConfig()
        self.db_path = self.config.db_path
        self._lock = threading.RLock()
        self._closed = False
        self._memory_anchor: sqlite3.Connection | None = None
        if self.db_path == MEMORY_PATH:
            # Private shared-cache database; the anchor keeps it alive between calls.
            self._target = f"file:simplenosql-{uuid.uuid4().hex}?mode=memory&cache=shared"
            self._uri = True
            self._memory_anchor = sqlite3.connect(
                self._target, uri=True, check_same_thread=False
            )
        else:
            self._target = self.db_path
            self._uri = False
        self._open()

    # --- Lifecycle ---

    @contextmanager
    def _connect(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation; commit on success, always close."""
        if self._closed:
            raise StorageIOError(operation, "storage engine is closed")
        # Shared-cache table locks ignore the busy timeout, so in-memory
        # stores serialize readers with writers.
        guard = self._lock if self._memory_anchor is not None else nullcontext()
        with guard:
            try:
                conn = sqlite3.connect(
                    self._target, timeout=self.config.busy_timeout_s, uri=self._uri
                )
            except sqlite3.Error as e:
                raise StorageIOError(operation, str(e)) from e
            try:
                yield conn
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StorageIOError(operation, str(e)) from e
            except Exception:
                conn.rollback()
                raise
            finally:
                conn.close()

    def _open(self) -> None:
        """Create the table if absent and reconcile older schema versions."""
        target = self.config.schema_version
        with self._lock, self._connect("open") as conn:
            if self._memory_anchor is None:
                conn.execute("PRAGMA journal_mode=WAL")
            current = int(conn.execute("PRAGMA user_version").fetchone()[0])
            conn.execute(SQL_CREATE_ENTRIES)
            if current == 0:
                logger.info("schema_created", db_path=self.db_path, version=target)
            elif current < target:
                logger.info(
                    "schema_upgrade", db_path=self.db_path, from_version=current, to_version=target
                )
                self.config.migrations.run(conn, current, target)
            if current < target:
                conn.execute(f"PRAGMA user_version = {int(target)}")

    def recreate(self) -> None:
        """Drop and recreate the entity table, discarding every stored document."""
        with self._lock, self._connect("recreate") as conn:
            conn.execute(SQL_DELETE_ENTRIES)
            conn.execute(SQL_CREATE_ENTRIES)
            conn.execute(f"PRAGMA user_version = {int(self.config.schema_version)}")
        logger.info("schema_recreated", db_path=self.db_path)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._memory_anchor is not None:
            self._memory_anchor.close()
            self._memory_anchor = None

    def __enter__(self) -> StorageEngine:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    # --- Writes ---

    def save(self, entity: Entity[Any]) -> None:
        """Upsert one entity; an existing (bucket, id) row is fully replaced."""
        bucket, entity_id = _validate_key(entity)
        text: str | None = None
        if entity.data is not None:
            try:
                text = self.config.serializer.serialize(entity.data)
            except SimpleNoSQLError:
                raise
            except Exception as e:
                raise SerializationError(str(e)) from e
        if text is not None and not isinstance(text, str):
            raise SerializationError(f"serializer returned {type(text).__name__}, expected str")

        with self._lock, self._connect("save") as conn:
            conn.execute(
                f"INSERT INTO {TABLE_NAME} ({COLUMN_BUCKET_ID}, {COLUMN_ENTITY_ID}, {COLUMN_DATA}) "
                "VALUES (?, ?, ?)",
                (bucket, entity_id, text),
            )
        logger.debug("entity_saved", bucket=bucket, entity_id=entity_id)

    def save_all(self, entities: Iterable[Entity[Any]]) -> int:
        """Save each entity with its own statement and return how many were saved.

        There is no atomicity across documents: a failure leaves earlier
        entities saved and later ones untouched.
        """
        saved = 0
        for entity in entities:
            self.save(entity)
            saved += 1
        return saved

    def delete_entity(self, bucket: str | None, entity_id: str | None) -> None:
        """Delete the row matching both key parts; no-op when nothing matches."""
        if bucket is None or entity_id is None:
            return
        with self._lock, self._connect("delete_entity") as conn:
            cursor = conn.execute(
                f"DELETE FROM {TABLE_NAME} WHERE {COLUMN_BUCKET_ID} = ? AND {COLUMN_ENTITY_ID} = ?",
                (bucket, entity_id),
            )
        logger.debug(
            "entity_deleted", bucket=bucket, entity_id=entity_id, rows_deleted=cursor.rowcount
        )

    def delete_bucket(self, bucket: str | None) -> None:
        """Delete every row in a bucket; no-op when the bucket is empty."""
        if bucket is None:
            return
        with self._lock, self._connect("delete_bucket") as conn:
            cursor = conn.execute(
                f"DELETE FROM {TABLE_NAME} WHERE {COLUMN_BUCKET_ID} = ?",
                (bucket,),
            )
        logger.debug("bucket_deleted", bucket=bucket, rows_deleted=cursor.rowcount)

    # --- Reads ---

    def get_by_key(
        self,
        bucket: str | None,
        entity_id: str | None,
        data_type: type[T],
        filter: FilterLike | None = None,
    ) -> list[Entity[T]]:
        """Return the entity stored under (bucket, entity_id) as a 0 or 1 element list."""
        if bucket is None or entity_id is None:
            return []
        return self._get_entities(
            "get_by_key",
            f"{COLUMN_BUCKET_ID} = ? AND {COLUMN_ENTITY_ID} = ?",
            (bucket, entity_id),
            data_type,
            _as_filter(filter),
        )

    def get_by_bucket(
        self,
        bucket: str | None,
        data_type: type[T],
        filter: FilterLike | None = None,
    ) -> list[Entity[T]]:
        """Return every entity in a bucket, in SQLite's natural row order."""
        if bucket is None:
            return []
        # Rows without an entity id can only come from a pre-version-3 table.
        return self._get_entities(
            "get_by_bucket",
            f"{COLUMN_BUCKET_ID} = ? AND {COLUMN_ENTITY_ID} IS NOT NULL",
            (bucket,),
            data_type,
            _as_filter(filter),
        )

    def _get_entities(
        self,
        operation: str,
        selection: str,
        params: tuple[Any, ...],
        data_type: type[T],
        flt: Filter[T] | None,
    ) -> list[Entity[T]]:
        sql = (
            f"SELECT {COLUMN_BUCKET_ID}, {COLUMN_ENTITY_ID}, {COLUMN_DATA} "
            f"FROM {TABLE_NAME} WHERE {selection}"
        )
        results: list[Entity[T]] = []
        with self._connect(operation) as conn:
            cursor = conn.execute(sql, params)
            try:
                for bucket_id, entity_id, data in cursor:
                    entity = self._reconstruct(bucket_id, entity_id, data, data_type)
                    if entity is None:
                        continue
                    if flt is not None and not flt.included(entity):
                        continue
                    results.append(entity)
            finally:
                cursor.close()
        logger.debug(operation, params=list(params), returned=len(results))
        return results

    def _reconstruct(
        self,
        bucket_id: str,
        entity_id: str,
        data: str | None,
        data_type: type[T],
    ) -> Entity[T] | None:
        """Turn one row into a typed Entity, or None when the row is skipped."""
        entity: Entity[T] = Entity(bucket_id, entity_id)
        try:
            payload = self.config.deserializer.deserialize(data, data_type)
        except Exception as e:
            if self.config.on_deserialization_error == "skip":
                logger.warning(
                    "row_skipped", bucket=bucket_id, entity_id=entity_id, error=str(e)
                )
                return None
            raise DeserializationError(bucket_id, entity_id, str(e)) from e
        if isinstance(payload, IdentityAssignable):
            payload.set_id(entity_id)
        entity.data = payload
        return entity

    # --- Operator helpers ---

    def list_buckets(self) -> list[str]:
        with self._connect("list_buckets") as conn:
            rows = conn.execute(
                f"SELECT DISTINCT {COLUMN_BUCKET_ID} FROM {TABLE_NAME} "
                f"WHERE {COLUMN_BUCKET_ID} IS NOT NULL ORDER BY {COLUMN_BUCKET_ID}"
            ).fetchall()
        return [str(r[0]) for r in rows]

    def count(self, bucket: str | None = None) -> int:
        with self._connect("count") as conn:
            if bucket is None:
                row = conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()
            else:
                row = conn.execute(
                    f"SELECT COUNT(*) FROM {TABLE_NAME} WHERE {COLUMN_BUCKET_ID} = ?",
                    (bucket,),
                ).fetchone()
        return int(row[0])

    def schema_version(self) -> int:
        with self._connect("schema_version") as conn:
            return int(conn.execute("PRAGMA user_version").fetchone()[0])

    def storage_info(self) -> dict[str, Any]:
        """Return backend info for operator commands."""
        return {
            "backend": "sqlite",
            "db_path": self.db_path,
            "table": TABLE_NAME,
            "schema_version": self.schema_version(),
            "entity_count": self.count(),
        }


def open_engine(db_path: str | None = None, **overrides: Any) -> StorageEngine:
    """Open a StorageEngine for db_path with optional StoreConfig overrides."""
    config = StoreConfig(db_path=db_path, **overrides) if db_path else StoreConfig(**overrides)
    return StorageEngine(config)


__all__ = [
    "FilterLike",
    "StorageEngine",
    "open_engine",
]
