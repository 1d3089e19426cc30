"""Unit tests for UserApplicationService using a mock repository."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import bcrypt
import pytest
from pydantic import ValidationError

from src.pf_common.errors import EmailExistsError, UserNotFoundError
from src.pf_user.application.schemas import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)
from src.pf_user.application.service import UserApplicationService
from src.pf_user.domain.models import User


def _make_user(user_id: int = 1, email: str = "ann@example.com") -> User:
    return User(
        id=user_id,
        name="Ann",
        email=email,
        password_hash="$2b$12$hash",
        preferred_currency="EUR",
        created_at=datetime.now(UTC),
    )


class TestCreateUserRequest:
    def test_defaults_currency_to_usd(self) -> None:
        req = CreateUserRequest(name="Ann", email="ann@example.com", password="Secret123")
        assert req.preferred_currency == "USD"

    @pytest.mark.parametrize("email", ["no-at-sign", "a@b", "a b@c.d"])
    def test_rejects_bad_email(self, email: str) -> None:
        with pytest.raises(ValidationError):
            CreateUserRequest(name="Ann", email=email, password="Secret123")

    def test_rejects_short_password(self) -> None:
        with pytest.raises(ValidationError):
            CreateUserRequest(name="Ann", email="ann@example.com", password="short")

    def test_rejects_lowercase_currency(self) -> None:
        with pytest.raises(ValidationError):
            CreateUserRequest(
                name="Ann", email="ann@example.com", password="Secret123", preferred_currency="usd"
            )


class TestCreateUser:
    async def test_stores_bcrypt_hash_and_lowercased_email(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.create.return_value = _make_user()
        svc = UserApplicationService(repo=mock_repo)

        result = await svc.create_user(
            AsyncMock(),
            CreateUserRequest(name="Ann", email="Ann@Example.com", password="Secret123"),
        )

        kwargs = mock_repo.create.call_args.kwargs
        assert kwargs["email"] == "ann@example.com"
        assert bcrypt.checkpw(b"Secret123", kwargs["password_hash"].encode())
        assert isinstance(result, UserResponse)
        assert "password_hash" not in result.model_dump()

    async def test_duplicate_email_propagates(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.create.side_effect = EmailExistsError()
        db = AsyncMock()
        svc = UserApplicationService(repo=mock_repo)

        with pytest.raises(EmailExistsError):
            await svc.create_user(
                db, CreateUserRequest(name="Ann", email="ann@example.com", password="Secret123")
            )
        db.rollback.assert_awaited_once()


class TestGetUpdateDelete:
    async def test_get_missing_user(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = None
        svc = UserApplicationService(repo=mock_repo)

        with pytest.raises(UserNotFoundError):
            await svc.get_user(MagicMock(), 42)

    async def test_update_returns_new_profile(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.update.return_value = _make_user(email="new@example.com")
        svc = UserApplicationService(repo=mock_repo)

        result = await svc.update_user(
            AsyncMock(),
            1,
            UpdateUserRequest(name="Ann", email="NEW@example.com", preferred_currency="EUR"),
        )

        assert result.email == "new@example.com"
        assert mock_repo.update.call_args.kwargs["email"] == "new@example.com"

    async def test_delete_missing_user(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.transaction_references.return_value = []
        mock_repo.delete.return_value = False
        svc = UserApplicationService(repo=mock_repo)

        with pytest.raises(UserNotFoundError):
            await svc.delete_user(AsyncMock(), 42)


class TestDeleteUser:
    async def test_drops_every_listing_the_user_appeared_in(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.transaction_references.return_value = [(3, 7), (3, 8), (4, 7)]
        mock_repo.delete.return_value = True
        cache = AsyncMock()
        db = AsyncMock()
        svc = UserApplicationService(repo=mock_repo, cache=cache)

        await svc.delete_user(db, 1)

        db.commit.assert_awaited_once()
        cache.invalidate.assert_awaited_once_with(
            "transactions:user:1",
            "transactions:account:3",
            "transactions:category:7",
            "transactions:category:8",
            "transactions:account:4",
        )

    async def test_missing_user_leaves_cache_alone(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.transaction_references.return_value = []
        mock_repo.delete.return_value = False
        cache = AsyncMock()
        svc = UserApplicationService(repo=mock_repo, cache=cache)

        with pytest.raises(UserNotFoundError):
            await svc.delete_user(AsyncMock(), 42)
        cache.invalidate.assert_not_awaited()
