"""Runs a whole .sql file as one unit.

SQLAlchemy's asyncpg adapter prepares every statement, and a prepared
statement cannot hold several commands. asyncpg's Connection.execute() with
no arguments uses the simple query protocol, which accepts a full script, so
the script goes to the driver connection directly.

The adapter sends BEGIN lazily on the first statement it executes. The runner
always queries the ledger through `conn` first, so by the time this runs the
script lands inside the runner's transaction together with the ledger insert.
"""

from sqlalchemy.ext.asyncio import AsyncConnection


class AsyncpgScriptExecutor:
    async def execute_script(self, conn: AsyncConnection, sql: str) -> None:
        raw = await conn.get_raw_connection()
        await raw.driver_connection.execute(sql)  # type: ignore[union-attr]
