"""Run migrations without starting the API.

    python -m src.pf_migrations                 # apply pending scripts
    python -m src.pf_migrations --status        # list the ledger
    python -m src.pf_migrations --dir other/    # override MIGRATIONS_DIR
"""

import argparse
import asyncio
import logging
import sys

from config.settings import settings
from src.pf_common.database import engine
from src.pf_common.errors import MigrationError
from src.pf_migrations.application.runner import MigrationRunner, run_migrations
from src.pf_migrations.infrastructure.ledger import MigrationLedger

logger = logging.getLogger("pf.migrations")


async def _status() -> None:
    runner = MigrationRunner(ledger=MigrationLedger(settings.MIGRATIONS_TABLE))
    async with engine.connect() as conn:
        records = await runner.list_applied(conn)
    for record in records:
        print(f"{record.applied_at.isoformat()}  {record.name}")
    if not records:
        print("No migrations recorded.")


async def _main(args: argparse.Namespace) -> None:
    try:
        if args.status:
            await _status()
        else:
            applied = await run_migrations(engine, args.dir, settings.MIGRATIONS_TABLE)
            for name in applied:
                print(f"- {name}")
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="python -m src.pf_migrations")
    parser.add_argument("--dir", default=settings.MIGRATIONS_DIR, help="Migrations directory")
    parser.add_argument("--status", action="store_true", help="List applied migrations")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(_main(args))
    except MigrationError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
