"""Output formatting helpers for the CLI."""

from __future__ import annotations

import json
import sys
from typing import Any

import yaml


def print_json(data: Any) -> None:
    """Print data as indented JSON; values JSON cannot encode are stringified."""
    print(json.dumps(data, indent=2, default=str))


def print_yaml(data: Any) -> None:
    """Print data as a YAML document."""
    print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")


def print_table(headers: list[str], rows: list[list[Any]], *, json_mode: bool = False) -> None:
    """Print rows under aligned headers, or as a JSON array of objects keyed by header."""
    if json_mode:
        print_json([dict(zip(headers, row)) for row in rows])
        return
    if not rows:
        return

    cells = [[str(v) for v in row] for row in rows]
    widths = [max(len(h), *(len(row[i]) for row in cells)) for i, h in enumerate(headers)]
    for line in [headers, ["-" * w for w in widths], *cells]:
        print("  ".join(v.ljust(w) for v, w in zip(line, widths)).rstrip())


def print_error(msg: str) -> None:
    print(f"Error: {msg}", file=sys.stderr)
