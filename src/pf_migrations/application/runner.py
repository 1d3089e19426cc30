"""Forward-only SQL migration runner.

Scripts are the `*.sql` files of one directory, applied in lexicographic
filename order; name them so that order is the intended one (001_, 002_, ...).
The ledger table, not the schema, decides what counts as applied.

Per script, inside one transaction:
  1. ledger lookup by filename → already recorded: skip
  2. read the file, execute it as a single unit
  3. insert the ledger row
A failing script aborts the run with ScriptExecutionError and is not recorded;
scripts applied earlier in the same run stay applied.

Every error raised here is fatal to startup.
"""

import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from src.pf_common.errors import ConfigurationError, ScriptExecutionError
from src.pf_migrations.domain.models import MigrationRecord
from src.pf_migrations.domain.repository import (
    MigrationLedgerProtocol,
    ScriptExecutorProtocol,
)
from src.pf_migrations.infrastructure.executor import AsyncpgScriptExecutor
from src.pf_migrations.infrastructure.ledger import MigrationLedger

logger = logging.getLogger(__name__)

MIGRATION_SUFFIX = ".sql"


def discover_scripts(directory: str | Path) -> list[str]:
    """Return migration filenames in `directory`, sorted lexicographically."""
    path = Path(directory)
    try:
        names = [
            entry.name
            for entry in path.iterdir()
            if entry.is_file() and entry.name.endswith(MIGRATION_SUFFIX)
        ]
    except OSError as exc:
        raise ConfigurationError(
            f"Failed to read migrations directory {path}: {exc}"
        ) from exc
    return sorted(names)


def _read_script(directory: str | Path, name: str) -> str:
    try:
        return (Path(directory) / name).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read migration file {name}: {exc}") from exc


class MigrationRunner:
    def __init__(
        self,
        ledger: MigrationLedgerProtocol | None = None,
        executor: ScriptExecutorProtocol | None = None,
    ) -> None:
        self._ledger: MigrationLedgerProtocol = ledger or MigrationLedger()
        self._executor: ScriptExecutorProtocol = executor or AsyncpgScriptExecutor()

    async def ensure_ledger_exists(self, conn: AsyncConnection) -> None:
        async with conn.begin():
            exists = await self._ledger.table_exists(conn)
        if not exists:
            raise ConfigurationError(
                f"Migrations ledger table '{self._ledger.table}' does not exist"
            )

    async def apply_pending(
        self,
        conn: AsyncConnection,
        directory: str | Path,
        scripts: list[str],
    ) -> list[str]:
        """Apply every unrecorded script in order; return the ones applied now."""
        applied: list[str] = []
        for name in scripts:
            if await self._apply_one(conn, directory, name):
                applied.append(name)
        return applied

    async def run(self, conn: AsyncConnection, directory: str | Path) -> list[str]:
        scripts = discover_scripts(directory)
        if not scripts:
            logger.info("No migration files found in %s", directory)
            return []

        await self.ensure_ledger_exists(conn)
        applied = await self.apply_pending(conn, directory, scripts)

        if applied:
            logger.info("Applied migrations: %s", ", ".join(applied))
        else:
            logger.info("No new migrations were applied")
        return applied

    async def list_applied(self, conn: AsyncConnection) -> list[MigrationRecord]:
        await self.ensure_ledger_exists(conn)
        async with conn.begin():
            return await self._ledger.list_applied(conn)

    async def _apply_one(
        self, conn: AsyncConnection, directory: str | Path, name: str
    ) -> bool:
        async with conn.begin():
            # Ledger lookup must be the first statement: it opens the DB transaction
            # the script executes in.
            if await self._ledger.is_applied(conn, name):
                logger.info("Migration %s already applied, skipping", name)
                return False

            sql = _read_script(directory, name)
            logger.info("Applying migration: %s", name)
            try:
                await self._executor.execute_script(conn, sql)
            except Exception as exc:
                raise ScriptExecutionError(name, exc) from exc
            await self._ledger.record(conn, name)

        logger.info("Migration %s applied successfully", name)
        return True


async def run_migrations(
    engine: AsyncEngine, directory: str | Path, table: str
) -> list[str]:
    """Startup entry point: one connection, one run."""
    runner = MigrationRunner(ledger=MigrationLedger(table))
    async with engine.connect() as conn:
        return await runner.run(conn, directory)
