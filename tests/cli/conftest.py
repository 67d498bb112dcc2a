"""Shared fixtures for CLI tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from simplenosql import Entity, StorageEngine, StoreConfig
from simplenosql.cli import app

if TYPE_CHECKING:
    from click.testing import Result


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_db(tmp_path):
    """Create a temp DB path for the CLI."""
    return str(tmp_path / "cli_test.db")


@pytest.fixture
def seeded_db(cli_db):
    """Create a DB with some seed data."""
    engine = StorageEngine(StoreConfig(db_path=cli_db))
    engine.save(Entity("albums", "a1", {"title": "Kid A", "year": 2000}))
    engine.save(Entity("albums", "a2", {"title": "Amnesiac", "year": 2001}))
    engine.save(Entity("artists", "r1", {"name": "Radiohead"}))
    engine.close()
    return cli_db


def invoke(runner: CliRunner, args: list[str], db_path: str | None = None) -> "Result":
    """Invoke CLI with the database injected before the subcommand."""
    if db_path:
        args = ["--db", db_path] + args
    return runner.invoke(app, args, catch_exceptions=False)
