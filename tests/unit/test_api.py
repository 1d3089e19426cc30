"""HTTP-level tests: routing, auth guard and the AppError envelope.

Dependencies are overridden, so no PostgreSQL or Redis is needed.
"""

from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from src.main import app
from src.pf_common.database import get_db_session
from src.pf_gateway.auth.dependencies import get_current_user_id
from src.pf_report.domain.models import StoredReport
from src.pf_transaction.api.router import get_transaction_service
from src.pf_transaction.application.service import TransactionApplicationService
from src.pf_transaction.domain.models import Transaction


async def _fake_session() -> AsyncGenerator[AsyncMock, None]:
    yield AsyncMock()


@pytest.fixture
def repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def authed(repo: AsyncMock) -> Iterator[None]:
    app.dependency_overrides[get_current_user_id] = lambda: 1
    app.dependency_overrides[get_db_session] = _fake_session
    app.dependency_overrides[get_transaction_service] = lambda: TransactionApplicationService(
        repo=repo
    )
    yield
    app.dependency_overrides.clear()


def _txn() -> Transaction:
    return Transaction(
        id=1,
        user_id=1,
        account_id=3,
        category_id=7,
        amount_cents=6500,
        currency="USD",
        type="expense",
        description=None,
        created_at=datetime(2026, 3, 1, tzinfo=UTC),
    )


_BODY = {"account_id": 3, "category_id": 7, "amount_cents": 6500, "type": "expense"}


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestAuthGuard:
    async def test_missing_token_is_401(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/transactions")
        assert resp.status_code == 401

    async def test_garbage_token_is_401(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/accounts", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"


@pytest.mark.usefixtures("authed")
class TestTransactionEndpoints:
    async def test_create_returns_envelope(self, client: AsyncClient, repo: AsyncMock) -> None:
        repo.user_exists.return_value = True
        repo.account_exists.return_value = True
        repo.category_exists.return_value = True
        repo.create.return_value = _txn()

        resp = await client.post("/api/v1/transactions", json=_BODY)

        assert resp.status_code == 201
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["amount_display"] == "65.00"
        assert body["request_id"].startswith("req_")

    async def test_missing_account_is_422_with_code(
        self, client: AsyncClient, repo: AsyncMock
    ) -> None:
        repo.user_exists.return_value = True
        repo.account_exists.return_value = False

        resp = await client.post("/api/v1/transactions", json={**_BODY, "account_id": 99})

        assert resp.status_code == 422
        body = resp.json()
        assert body["code"] == 4002
        assert body["data"] is None
        assert "account 99" in body["message"]
        repo.create.assert_not_awaited()

    async def test_non_positive_amount_rejected(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/transactions", json={**_BODY, "amount_cents": 0})
        assert resp.status_code == 422

    async def test_compare(self, client: AsyncClient, repo: AsyncMock) -> None:
        from src.pf_transaction.domain.models import IncomeExpenseTotals

        repo.totals_by_type.return_value = IncomeExpenseTotals(1000, 400)

        resp = await client.get("/api/v1/transactions/compare")

        assert resp.status_code == 200
        assert resp.json()["data"]["net"] == 600

    async def test_category_listing_route(self, client: AsyncClient, repo: AsyncMock) -> None:
        repo.list_by_category.return_value = [_txn()]

        resp = await client.get("/api/v1/categories/7/transactions")

        assert resp.status_code == 200
        assert [t["id"] for t in resp.json()["data"]] == [1]

    async def test_foreign_account_listing_is_404(
        self, client: AsyncClient, repo: AsyncMock
    ) -> None:
        repo.account_exists.return_value = False

        resp = await client.get("/api/v1/accounts/999/transactions")

        assert resp.status_code == 404
        assert resp.json()["data"] is None
        repo.list_by_account.assert_not_awaited()


@pytest.mark.usefixtures("authed")
class TestReportEndpoints:
    async def test_start_after_end_is_422(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/reports/expenses-by-category",
            params={"start_date": "2026-04-01", "end_date": "2026-03-01"},
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 9004

    async def test_summary_uses_stored_report(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from src.pf_report.api import router as report_router

        report_repo = AsyncMock()
        report_repo.latest.return_value = StoredReport(
            id=5,
            user_id=1,
            report_name="summary",
            generated_at=datetime(2026, 3, 1, tzinfo=UTC),
            data='{"kind": "summary", "total_balance_cents": 100, '
            '"month_expenses_cents": 0, "completed_goals": 0}',
        )
        monkeypatch.setattr(report_router._service, "_repo", report_repo)

        resp = await client.get("/api/v1/reports/summary")

        assert resp.status_code == 200
        assert resp.json()["data"]["report_id"] == 5
