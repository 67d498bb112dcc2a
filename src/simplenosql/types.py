"""Entity, Filter, and identity types for SimpleNoSQL."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from simplenosql.errors import ValidationError

T = TypeVar("T")


class Entity(Generic[T]):
    """A single document: an immutable (bucket, id) key plus a typed payload.

    The key is fixed at construction. ``data`` is attached afterwards, either
    by the caller before a save or by the storage engine during a read.
    """

    __slots__ = ("_bucket", "_id", "data")

    def __init__(self, bucket: str, id: str, data: T | None = None) -> None:
        if bucket is None:
            raise ValidationError("Entity bucket must not be None")
        if id is None:
            raise ValidationError("Entity id must not be None")
        self._bucket = bucket
        self._id = id
        self.data: T | None = data

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def id(self) -> str:
        return self._id

    @property
    def key(self) -> tuple[str, str]:
        return (self._bucket, self._id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.key == other.key and self.data == other.data

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Entity(bucket={self._bucket!r}, id={self._id!r}, data={self.data!r})"


@runtime_checkable
class Filter(Protocol[T]):
    """Predicate applied to a fully reconstructed entity after a read."""

    def included(self, entity: Entity[T]) -> bool: ...


@dataclass(frozen=True)
class PredicateFilter(Generic[T]):
    """Filter backed by a plain callable."""

    predicate: Callable[[Entity[T]], bool]

    def included(self, entity: Entity[T]) -> bool:
        return bool(self.predicate(entity))


def where(predicate: Callable[[Entity[Any]], bool]) -> PredicateFilter[Any]:
    """Wrap a callable as a Filter.

    Example::

        engine.get_by_bucket("albums", Album, where(lambda e: e.data.year == 1999))
    """
    return PredicateFilter(predicate)


class IdentityAssignable(ABC):
    """Capability for payloads that track their own id.

    After a payload is deserialized, the storage engine calls ``set_id`` with
    the row's entity id when the payload is an instance of this class.
    """

    @abstractmethod
    def set_id(self, entity_id: str) -> None: ...


class IdentifiedModel(BaseModel, IdentityAssignable):
    """Pydantic model whose ``id`` is back-filled from the entity key on read."""

    id: str | None = None

    def set_id(self, entity_id: str) -> None:
        self.id = entity_id
