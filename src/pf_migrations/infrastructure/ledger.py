"""MigrationLedger — the applied-scripts table.

The table is a precondition (db/init/000_migrations_ledger.sql); this class
never creates it. Its name comes from settings, so it is validated as a plain
SQL identifier before being formatted into the statements below.
"""

import re

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

from src.pf_common.errors import ConfigurationError
from src.pf_migrations.domain.models import MigrationRecord

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")

_TABLE_EXISTS_SQL = text("""
    SELECT EXISTS (
        SELECT FROM information_schema.tables
        WHERE table_schema = current_schema()
          AND table_name = :table
    )
""")


class MigrationLedger:
    def __init__(self, table: str = "migrations") -> None:
        if not _IDENTIFIER.match(table):
            raise ConfigurationError(f"Invalid migrations table name: {table!r}")
        self.table = table
        self._is_applied_sql = text(
            f"SELECT COUNT(*) FROM {table} WHERE migration_name = :name"
        )
        self._record_sql = text(
            f"INSERT INTO {table} (migration_name) VALUES (:name) "
            "RETURNING migration_name, applied_at"
        )
        self._list_sql = text(
            f"SELECT migration_name, applied_at FROM {table} ORDER BY migration_name"
        )

    async def table_exists(self, conn: AsyncConnection) -> bool:
        result = await conn.execute(_TABLE_EXISTS_SQL, {"table": self.table})
        return bool(result.scalar())

    async def is_applied(self, conn: AsyncConnection, name: str) -> bool:
        result = await conn.execute(self._is_applied_sql, {"name": name})
        return (result.scalar() or 0) > 0

    async def record(self, conn: AsyncConnection, name: str) -> MigrationRecord:
        result = await conn.execute(self._record_sql, {"name": name})
        row = result.one()
        return MigrationRecord(name=row.migration_name, applied_at=row.applied_at)

    async def list_applied(self, conn: AsyncConnection) -> list[MigrationRecord]:
        result = await conn.execute(self._list_sql)
        return [
            MigrationRecord(name=row.migration_name, applied_at=row.applied_at)
            for row in result.fetchall()
        ]
