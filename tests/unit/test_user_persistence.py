"""Unit tests for UserRepository conflict mapping."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.pf_common.errors import EmailExistsError
from src.pf_user.infrastructure.persistence import UserRepository


def _unique_violation(constraint: str) -> IntegrityError:
    orig = Exception(f'duplicate key value violates unique constraint "{constraint}"')
    return IntegrityError("INSERT INTO users ...", {}, orig)


class TestCreate:
    async def test_duplicate_email_maps_to_email_exists(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(side_effect=_unique_violation("uq_users_email"))

        with pytest.raises(EmailExistsError) as exc_info:
            await UserRepository().create(db, "Ann", "ann@example.com", "hash", "USD")
        assert exc_info.value.http_status == 409

    async def test_unrelated_violation_propagates(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(side_effect=_unique_violation("users_pkey"))

        with pytest.raises(IntegrityError):
            await UserRepository().create(db, "Ann", "ann@example.com", "hash", "USD")


class TestExists:
    async def test_exists(self) -> None:
        db = MagicMock()
        result_mock = MagicMock()
        result_mock.scalar.return_value = True
        db.execute = AsyncMock(return_value=result_mock)

        assert await UserRepository().exists(db, 1) is True


class TestTransactionReferences:
    async def test_maps_rows_to_pairs(self) -> None:
        db = MagicMock()
        result_mock = MagicMock()
        result_mock.fetchall.return_value = [
            MagicMock(account_id=3, category_id=7),
            MagicMock(account_id=4, category_id=7),
        ]
        db.execute = AsyncMock(return_value=result_mock)

        refs = await UserRepository().transaction_references(db, 1)

        assert refs == [(3, 7), (4, 7)]
        assert db.execute.call_args.args[1] == {"user_id": 1}
