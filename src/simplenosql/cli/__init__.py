"""SimpleNoSQL CLI: operator console for inspecting and editing a document store."""

from __future__ import annotations

from typing import Optional

import typer

from simplenosql.cli import entities, info

app = typer.Typer(
    name="nosql",
    help="SimpleNoSQL CLI - operator console for inspecting and editing document stores.",
    no_args_is_help=True,
)


class _State:
    """Global CLI state shared across subcommands."""

    db: str = "simplenosql.db"
    json_output: bool = False


state = _State()


def _version_callback(value: bool) -> None:
    if value:
        from simplenosql import __version__

        print(f"nosql {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    db: Optional[str] = typer.Option(
        None,
        "--db",
        envvar="SIMPLENOSQL_DB",
        help="SQLite database file path (default: simplenosql.db)",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output when supported"),
    version: bool = typer.Option(
        False, "--version", help="Show version", is_eager=True, callback=_version_callback
    ),
) -> None:
    """Global options for all nosql commands."""
    from simplenosql.config import DATABASE_NAME

    state.db = db or DATABASE_NAME
    state.json_output = json_output
    if ctx.invoked_subcommand is None and not version:
        print(ctx.get_help())
        raise typer.Exit()


app.command(name="info")(info.info_cmd)
app.command(name="buckets")(info.buckets_cmd)
app.command(name="get")(entities.get_cmd)
app.command(name="put")(entities.put_cmd)
app.command(name="delete")(entities.delete_cmd)
app.command(name="reset")(entities.reset_cmd)


def main() -> None:
    """Entry point for the nosql CLI."""
    app()
