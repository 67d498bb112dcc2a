"""Serializer/Deserializer capabilities and the pydantic-backed JSON implementation."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter

T = TypeVar("T")


@runtime_checkable
class Serializer(Protocol):
    """Turns a payload into the text stored in the data column."""

    def serialize(self, value: Any) -> str: ...


@runtime_checkable
class Deserializer(Protocol):
    """Turns stored text back into a payload of the requested type."""

    def deserialize(self, text: str | None, data_type: type[T]) -> T: ...


@lru_cache(maxsize=256)
def _adapter(data_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(data_type)


class JsonSerializer:
    """JSON serializer for pydantic models, dataclasses and builtin values."""

    def serialize(self, value: Any) -> str:
        if value is None:
            return "null"
        return _adapter(type(value)).dump_json(value).decode()


class JsonDeserializer:
    """JSON deserializer validating into the requested type.

    ``None`` text (a NULL data column) yields ``None``.
    """

    def deserialize(self, text: str | None, data_type: type[T]) -> T:
        if text is None:
            return None  # type: ignore[return-value]
        return _adapter(data_type).validate_json(text)
