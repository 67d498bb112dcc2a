"""nosql get / put / delete / reset - read and edit documents."""

from __future__ import annotations

import json
from typing import Any, Optional

import typer

from simplenosql.cli import _exitcodes as ec
from simplenosql.cli._output import print_error, print_json, print_table, print_yaml
from simplenosql.cli._storage import open_store
from simplenosql.errors import SimpleNoSQLError
from simplenosql.types import Entity

_FORMATS = ("text", "json", "yaml")


def _as_record(entity: Entity[Any]) -> dict[str, Any]:
    return {"bucket": entity.bucket, "id": entity.id, "data": entity.data}


def get_cmd(
    bucket: str = typer.Argument(..., help="Bucket to read"),
    entity_id: Optional[str] = typer.Argument(None, help="Entity id (default: whole bucket)"),
    fmt: str = typer.Option("text", "--format", help="Output format: text, json or yaml"),
) -> None:
    """Print one entity or every entity of a bucket."""
    from simplenosql.cli import state

    if fmt not in _FORMATS:
        print_error(f"Unknown format '{fmt}', expected one of {', '.join(_FORMATS)}")
        raise typer.Exit(ec.USAGE_ERROR)
    if state.json_output:
        fmt = "json"

    engine = open_store(must_exist=True)
    try:
        if entity_id is not None:
            found = engine.get_by_key(bucket, entity_id, Any)
        else:
            found = engine.get_by_bucket(bucket, Any)
    except SimpleNoSQLError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    finally:
        engine.close()

    if entity_id is not None and not found:
        print_error(f"Entity not found: {bucket}/{entity_id}")
        raise typer.Exit(ec.EXECUTION_FAILURE)

    records = [_as_record(e) for e in found]
    if fmt == "json":
        print_json(records)
    elif fmt == "yaml":
        print_yaml(records)
    else:
        rows = [[r["bucket"], r["id"], json.dumps(r["data"], default=str)] for r in records]
        print_table(["bucket", "id", "data"], rows)


def put_cmd(
    bucket: str = typer.Argument(..., help="Bucket to write"),
    entity_id: str = typer.Argument(..., help="Entity id"),
    data: str = typer.Argument(..., help="Payload as a JSON document"),
) -> None:
    """Save a JSON payload under (bucket, entity id), replacing any previous one."""
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        print_error(f"Payload is not valid JSON: {e}")
        raise typer.Exit(ec.USAGE_ERROR)

    engine = open_store()
    try:
        engine.save(Entity(bucket, entity_id, payload))
    except SimpleNoSQLError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    finally:
        engine.close()
    print(f"Saved {bucket}/{entity_id}")


def delete_cmd(
    bucket: str = typer.Argument(..., help="Bucket to delete from"),
    entity_id: Optional[str] = typer.Argument(None, help="Entity id (default: whole bucket)"),
) -> None:
    """Delete one entity, or a whole bucket when no entity id is given."""
    engine = open_store(must_exist=True)
    try:
        if entity_id is not None:
            engine.delete_entity(bucket, entity_id)
        else:
            engine.delete_bucket(bucket)
    except SimpleNoSQLError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    finally:
        engine.close()
    target = f"{bucket}/{entity_id}" if entity_id is not None else f"bucket {bucket}"
    print(f"Deleted {target}")


def reset_cmd(
    yes: bool = typer.Option(False, "--yes", help="Confirm dropping every stored document"),
) -> None:
    """Drop and recreate the entity table."""
    if not yes:
        print_error("reset discards every document; pass --yes to confirm")
        raise typer.Exit(ec.USAGE_ERROR)
    engine = open_store()
    try:
        engine.recreate()
    except SimpleNoSQLError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    finally:
        engine.close()
    print("Store reset")
