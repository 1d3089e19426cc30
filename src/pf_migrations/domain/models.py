"""Domain models for pf_migrations — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MigrationRecord:
    """One ledger row. Written once by the runner, never updated or deleted."""

    name: str  # script filename, unique
    applied_at: datetime
