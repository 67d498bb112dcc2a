"""CLI helpers for opening the storage engine selected by global options."""

from __future__ import annotations

import os

import typer

from simplenosql.cli import _exitcodes as ec
from simplenosql.cli._output import print_error
from simplenosql.storage import MEMORY_PATH, StorageEngine, open_engine


def resolve_db_path() -> str:
    """Return the database path from CLI state."""
    from simplenosql.cli import state

    return state.db


def open_store(*, must_exist: bool = False) -> StorageEngine:
    """Open the storage engine, exiting with DATABASE_ERROR when that fails."""
    db_path = resolve_db_path()
    if must_exist and db_path != MEMORY_PATH and not os.path.exists(db_path):
        print_error(f"Database not found: {db_path}")
        raise typer.Exit(ec.DATABASE_ERROR)
    try:
        return open_engine(db_path)
    except Exception as e:
        print_error(f"Cannot open database: {e}")
        raise typer.Exit(ec.DATABASE_ERROR)
