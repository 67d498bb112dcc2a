"""Schema reconciliation: ordered steps keyed by (from_version, to_version)."""

from __future__ import annotations

import sqlite3
import warnings
from dataclasses import dataclass, field
from typing import Callable

from simplenosql.contract import COLUMN_DATA, COLUMN_ENTITY_ID, TABLE_NAME
from simplenosql.errors import MigrationWarning
from simplenosql.logging_config import get_logger

__all__ = [
    "LEGACY_PAYLOAD_MARKER",
    "MigrationRegistry",
    "MigrationStep",
    "default_migrations",
    "purge_orphaned_rows",
]

logger = get_logger(__name__)

# Version 2 payloads that still reference a saved file are kept on upgrade.
LEGACY_PAYLOAD_MARKER = "filePath"

StepFunc = Callable[[sqlite3.Connection], None]


@dataclass(frozen=True)
class MigrationStep:
    """A single reconciliation step applied during a version upgrade."""

    from_version: int
    to_version: int
    func: StepFunc

    @property
    def name(self) -> str:
        return getattr(self.func, "__name__", repr(self.func))

    def applies(self, old_version: int, new_version: int) -> bool:
        return old_version <= self.from_version and self.to_version <= new_version


@dataclass
class MigrationRegistry:
    """Ordered collection of reconciliation steps.

    Steps whose (from_version, to_version) range lies inside an upgrade run in
    ascending order. Every other transition is a no-op.
    """

    steps: list[MigrationStep] = field(default_factory=list)

    def register(self, *, from_version: int, to_version: int) -> Callable[[StepFunc], StepFunc]:
        """Decorator registering a function as a reconciliation step.

        Example::

            registry = MigrationRegistry()

            @registry.register(from_version=3, to_version=4)
            def drop_empty_buckets(conn: sqlite3.Connection) -> None:
                conn.execute("DELETE FROM simplenosql WHERE bucketid = ''")
        """
        if to_version <= from_version:
            raise ValueError(
                f"to_version ({to_version}) must be greater than from_version ({from_version})"
            )

        def decorator(func: StepFunc) -> StepFunc:
            self.steps.append(MigrationStep(from_version, to_version, func))
            self.steps.sort(key=lambda s: (s.from_version, s.to_version))
            return func

        return decorator

    def plan(self, old_version: int, new_version: int) -> list[MigrationStep]:
        """Return the steps that an upgrade from old_version to new_version runs."""
        if new_version <= old_version:
            return []
        return [s for s in self.steps if s.applies(old_version, new_version)]

    def run(self, conn: sqlite3.Connection, old_version: int, new_version: int) -> list[str]:
        """Apply the planned steps, returning the names of those that succeeded.

        A failing step is rolled back, logged and reported as a MigrationWarning;
        it never stops the remaining steps or the store from opening.
        """
        applied: list[str] = []
        for step in self.plan(old_version, new_version):
            try:
                step.func(conn)
                conn.commit()
            except Exception as e:
                conn.rollback()
                logger.warning(
                    "migration_step_failed",
                    step=step.name,
                    from_version=step.from_version,
                    to_version=step.to_version,
                    error=str(e),
                )
                warnings.warn(
                    f"Schema reconciliation step '{step.name}' "
                    f"({step.from_version}->{step.to_version}) failed: {e}",
                    MigrationWarning,
                    stacklevel=2,
                )
                continue
            logger.info(
                "migration_step_applied",
                step=step.name,
                from_version=step.from_version,
                to_version=step.to_version,
            )
            applied.append(step.name)
        return applied


def purge_orphaned_rows(conn: sqlite3.Connection) -> None:
    """Delete rows left by version 2 that have no entity id and no saved file."""
    cursor = conn.execute(
        f"DELETE FROM {TABLE_NAME} WHERE {COLUMN_ENTITY_ID} IS NULL "
        f"AND {COLUMN_DATA} NOT LIKE ?",
        (f"%{LEGACY_PAYLOAD_MARKER}%",),
    )
    logger.info("orphaned_rows_purged", rows_deleted=cursor.rowcount)


def default_migrations() -> MigrationRegistry:
    """Build the registry of built-in reconciliation steps."""
    registry = MigrationRegistry()
    registry.register(from_version=2, to_version=3)(purge_orphaned_rows)
    return registry
