"""Background task facade: runs storage calls off the caller's thread.

Usage::

    with SimpleNoSQL(StoreConfig(db_path="albums.db")) as store:
        store.save(Entity("albums", "a1", album)).result()
        future = store.bucket("albums").using(Album).filter(is_vinyl).retrieve()
        for entity in future.result():
            ...
        store.bucket("albums").entity("a1").delete().result()

Every operation returns a ``concurrent.futures.Future``. Errors raised by the
storage engine surface through ``Future.result()``; an optional callback is
invoked with the result only when the operation succeeds, and an exception it
raises is logged as ``callback_failed``.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, TypeVar

from simplenosql.config import StoreConfig
from simplenosql.errors import StorageIOError
from simplenosql.logging_config import get_logger
from simplenosql.storage import FilterLike, StorageEngine
from simplenosql.types import Entity

__all__ = ["QueryBuilder", "SimpleNoSQL"]

T = TypeVar("T")
R = TypeVar("R")

logger = get_logger(__name__)


def _failed(operation: str) -> Future[Any]:
    future: Future[Any] = Future()
    future.set_exception(StorageIOError(operation, "task facade is closed"))
    return future


class SimpleNoSQL:
    """Asynchronous front door to a StorageEngine backed by a thread pool."""

    def __init__(
        self,
        config: StoreConfig | None = None,
        *,
        engine: StorageEngine | None = None,
    ) -> None:
        self.engine = engine if engine is not None else StorageEngine(config)
        self._owns_engine = engine is None
        self._executor = ThreadPoolExecutor(
            max_workers=self.engine.config.max_workers,
            thread_name_prefix="simplenosql",
        )
        self._closed = False

    def _submit(
        self,
        operation: str,
        func: Callable[..., R],
        *args: Any,
        callback: Callable[[R], None] | None = None,
    ) -> Future[R]:
        if self._closed:
            return _failed(operation)
        try:
            future = self._executor.submit(func, *args)
        except RuntimeError:
            # close() won the race after the _closed check
            return _failed(operation)
        if callback is not None:

            def _on_done(done: Future[R]) -> None:
                if done.cancelled() or done.exception() is not None:
                    return
                try:
                    callback(done.result())
                except Exception as e:
                    logger.warning("callback_failed", operation=operation, error=repr(e))

            future.add_done_callback(_on_done)
        return future

    def save(
        self,
        *entities: Entity[Any],
        callback: Callable[[int], None] | None = None,
    ) -> Future[int]:
        """Save entities in the background; the future yields the number saved."""
        return self._submit("save", self.engine.save_all, list(entities), callback=callback)

    def bucket(self, bucket_id: str) -> QueryBuilder[Any]:
        """Start a query or delete against one bucket."""
        return QueryBuilder(store=self, bucket_id=bucket_id)

    def close(self, wait: bool = True) -> None:
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=wait)
        if self._owns_engine:
            self.engine.close()

    def __enter__(self) -> SimpleNoSQL:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


@dataclass(frozen=True)
class QueryBuilder(Generic[T]):
    """Fluent description of a read or delete; each step returns a new builder."""

    store: SimpleNoSQL
    bucket_id: str | None
    entity_id: str | None = None
    data_type: Any = Any
    flt: FilterLike | None = None

    def entity(self, entity_id: str) -> QueryBuilder[T]:
        return replace(self, entity_id=entity_id)

    def using(self, data_type: type[R]) -> QueryBuilder[R]:
        return replace(self, data_type=data_type)  # type: ignore[return-value]

    def filter(self, flt: FilterLike) -> QueryBuilder[T]:
        return replace(self, flt=flt)

    def retrieve(
        self,
        callback: Callable[[list[Entity[T]]], None] | None = None,
    ) -> Future[list[Entity[T]]]:
        """Fetch one entity when an entity id is set, otherwise the whole bucket."""
        engine = self.store.engine
        if self.entity_id is not None:
            return self.store._submit(
                "get_by_key",
                engine.get_by_key,
                self.bucket_id,
                self.entity_id,
                self.data_type,
                self.flt,
                callback=callback,
            )
        return self.store._submit(
            "get_by_bucket",
            engine.get_by_bucket,
            self.bucket_id,
            self.data_type,
            self.flt,
            callback=callback,
        )

    def delete(self, callback: Callable[[None], None] | None = None) -> Future[None]:
        """Delete one entity when an entity id is set, otherwise the whole bucket."""
        engine = self.store.engine
        if self.entity_id is not None:
            logger.debug("delete_submitted", bucket=self.bucket_id, entity_id=self.entity_id)
            return self.store._submit(
                "delete_entity",
                engine.delete_entity,
                self.bucket_id,
                self.entity_id,
                callback=callback,
            )
        logger.debug("delete_submitted", bucket=self.bucket_id)
        return self.store._submit(
            "delete_bucket", engine.delete_bucket, self.bucket_id, callback=callback
        )
