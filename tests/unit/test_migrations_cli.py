"""Tests for `python -m src.pf_migrations` argument handling and exit codes."""

from unittest.mock import AsyncMock

import pytest

from src.pf_common.errors import ConfigurationError
from src.pf_migrations import __main__ as cli


@pytest.fixture(autouse=True)
def _no_engine_dispose(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "engine", AsyncMock())


def test_applies_and_prints_names(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    run = AsyncMock(return_value=["001_users.sql", "002_accounts.sql"])
    monkeypatch.setattr(cli, "run_migrations", run)

    assert cli.main(["--dir", "custom/"]) == 0

    assert run.await_args.args[1] == "custom/"
    out = capsys.readouterr().out
    assert "- 001_users.sql" in out
    assert "- 002_accounts.sql" in out


def test_migration_error_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    run = AsyncMock(
        side_effect=ConfigurationError("Migrations ledger table 'migrations' does not exist")
    )
    monkeypatch.setattr(cli, "run_migrations", run)

    assert cli.main([]) == 1
    cli.engine.dispose.assert_awaited_once()
