"""Shared test fixtures for SimpleNoSQL tests."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from simplenosql import Entity, IdentifiedModel, SimpleNoSQL, StorageEngine, StoreConfig

# --- Test payload types ---


class SampleBean(BaseModel):
    name: str
    listing: list[str] = []
    field1: str | None = None


class Album(IdentifiedModel):
    title: str
    year: int = 0


def make_bean_entity(bucket: str, entity_id: str, name: str = "SimpleNoSQL") -> Entity[SampleBean]:
    """Build an entity whose payload carries the listing ID0..ID3."""
    bean = SampleBean(name=name, listing=[f"ID{i}" for i in range(4)])
    return Entity(bucket, entity_id, bean)


# --- Fixtures ---


@pytest.fixture
def tmp_db(tmp_path):
    """Create a temporary SQLite database path."""
    return str(tmp_path / "test.db")


@pytest.fixture
def engine(tmp_db):
    """Create a StorageEngine over a temporary database."""
    e = StorageEngine(StoreConfig(db_path=tmp_db))
    yield e
    e.close()


@pytest.fixture
def store(tmp_db):
    """Create a SimpleNoSQL task facade over a temporary database."""
    s = SimpleNoSQL(StoreConfig(db_path=tmp_db, max_workers=2))
    yield s
    s.close()
