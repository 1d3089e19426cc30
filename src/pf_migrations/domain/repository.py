"""Protocols for the runner's two collaborators.

Unit tests inject in-memory fakes; infrastructure/ provides the PostgreSQL
implementations. Every method runs inside a transaction opened by the runner
on `conn`.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncConnection

from src.pf_migrations.domain.models import MigrationRecord


class MigrationLedgerProtocol(Protocol):
    table: str

    async def table_exists(self, conn: AsyncConnection) -> bool: ...

    async def is_applied(self, conn: AsyncConnection, name: str) -> bool: ...

    async def record(self, conn: AsyncConnection, name: str) -> MigrationRecord: ...

    async def list_applied(self, conn: AsyncConnection) -> list[MigrationRecord]: ...


class ScriptExecutorProtocol(Protocol):
    async def execute_script(self, conn: AsyncConnection, sql: str) -> None: ...
