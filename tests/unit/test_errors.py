"""Tests for pf_common.errors, pf_common.response and pf_common.database."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from src.pf_common.database import store_errors, unit_of_work
from src.pf_common.errors import (
    AccountNotFoundError,
    AppError,
    ConfigurationError,
    MigrationError,
    ReferenceNotFoundError,
    ScriptExecutionError,
    StoreError,
    TransactionNotFoundError,
    ValidationFailedError,
)
from src.pf_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_not_found_errors(self) -> None:
        assert AccountNotFoundError(3).http_status == 404
        assert TransactionNotFoundError(1).code == 4001

    def test_reference_error_names_reference(self) -> None:
        err = ReferenceNotFoundError("account", 99)
        assert err.code == 4002
        assert err.http_status == 422
        assert err.message == "Referenced account 99 does not exist"

    def test_reference_error_without_id(self) -> None:
        assert ReferenceNotFoundError("user").message == "Referenced user does not exist"

    def test_validation_failed(self) -> None:
        err = ValidationFailedError("start_date after end_date")
        assert err.http_status == 422
        assert "start_date" in err.message


class TestMigrationErrors:
    def test_not_request_errors(self) -> None:
        assert not issubclass(MigrationError, AppError)
        assert issubclass(ConfigurationError, MigrationError)

    def test_script_execution_error_keeps_cause(self) -> None:
        cause = RuntimeError('relation "t" already exists')
        err = ScriptExecutionError("020_t.sql", cause)
        assert err.script == "020_t.sql"
        assert err.cause is cause
        assert "020_t.sql" in str(err)
        assert "already exists" in str(err)


class TestResponse:
    def test_success(self) -> None:
        resp = success_response({"id": 1})
        assert resp.code == 0
        assert resp.data == {"id": 1}
        assert resp.request_id.startswith("req_")

    def test_error(self) -> None:
        resp = error_response(4002, "Referenced account 9 does not exist")
        assert isinstance(resp, ApiResponse)
        assert resp.data is None


class TestStoreErrors:
    def test_sqlalchemy_error_becomes_store_error(self) -> None:
        with pytest.raises(StoreError) as exc_info:
            with store_errors():
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        assert exc_info.value.http_status == 503

    def test_domain_errors_pass_through(self) -> None:
        with pytest.raises(AccountNotFoundError):
            with store_errors():
                raise AccountNotFoundError(1)

    async def test_unit_of_work_commits(self) -> None:
        db = AsyncMock()
        async with unit_of_work(db):
            pass
        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    async def test_unit_of_work_rolls_back_store_failure(self) -> None:
        db = AsyncMock()
        with pytest.raises(StoreError):
            async with unit_of_work(db):
                raise OperationalError("INSERT", {}, Exception("server closed the connection"))
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()
