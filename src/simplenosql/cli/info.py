"""nosql info / nosql buckets - store status and bucket overview."""

from __future__ import annotations

import os
from typing import Any

import typer

from simplenosql.cli._output import print_json, print_table
from simplenosql.cli._storage import open_store


def info_cmd(
    stats: bool = typer.Option(False, "--stats", help="Show per-bucket entity counts"),
) -> None:
    """Show database status and schema version."""
    from simplenosql.cli import state

    json_mode = state.json_output
    engine = open_store(must_exist=True)
    try:
        data: dict[str, Any] = engine.storage_info()
        db_path = str(data["db_path"])
        if os.path.exists(db_path):
            data["file_size_bytes"] = os.path.getsize(db_path)
        if stats:
            data["bucket_counts"] = {b: engine.count(b) for b in engine.list_buckets()}

        if json_mode:
            print_json(data)
            return

        print(f"Backend: {data['backend']}")
        print(f"Database: {db_path}")
        if "file_size_bytes" in data:
            print(f"File size: {int(data['file_size_bytes']):,} bytes")
        print(f"Schema version: {data['schema_version']}")
        print(f"Entities: {data['entity_count']}")
        if stats:
            print("\nBucket counts:")
            for name, cnt in data["bucket_counts"].items():
                print(f"  {name}: {cnt}")
    finally:
        engine.close()


def buckets_cmd() -> None:
    """List buckets with their entity counts."""
    from simplenosql.cli import state

    engine = open_store(must_exist=True)
    try:
        rows = [[b, engine.count(b)] for b in engine.list_buckets()]
    finally:
        engine.close()
    if not rows and not state.json_output:
        print("(no buckets)")
        return
    print_table(["bucket", "entities"], rows, json_mode=state.json_output)
