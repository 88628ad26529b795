"""Unit tests for UsersService.

Tests cover:
- natural-key conflicts on create and update
- not-found handling for id, wallet and username lookups
- partial updates passing only the fields that were sent
"""

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from core.errors import ConflictError, NotFoundError
from schemas import UserCreate, UserUpdate
from services.users_service import UsersService

WALLET = "0x" + "ab" * 20


def _make_user(**overrides):
    values = {"id": uuid.uuid4(), "is_freelancer": False, "username": "alice"}
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def users_repo():
    repo = AsyncMock()
    repo.get_by_wallet_address.return_value = None
    repo.get_by_username.return_value = None
    repo.get_by_email.return_value = None
    return repo


@pytest.mark.unit
class TestCreateUser:
    async def test_creates_when_keys_are_free(self, users_repo):
        created = _make_user()
        users_repo.create.return_value = created
        data = UserCreate(wallet_address=WALLET, username="alice")

        with patch("services.users_service.log_business_event") as mock_event:
            result = await UsersService(users_repo).create_user(data)

        assert result is created
        users_repo.create.assert_awaited_once()
        assert users_repo.create.call_args.kwargs["wallet_address"] == WALLET
        mock_event.assert_called_once_with("users.registered")

    async def test_duplicate_wallet_raises_conflict(self, users_repo):
        users_repo.get_by_wallet_address.return_value = _make_user()
        data = UserCreate(wallet_address=WALLET, username="alice")

        with pytest.raises(ConflictError) as exc_info:
            await UsersService(users_repo).create_user(data)

        assert exc_info.value.details == {"field": "wallet_address"}
        users_repo.create.assert_not_awaited()

    async def test_duplicate_email_raises_conflict(self, users_repo):
        users_repo.get_by_email.return_value = _make_user()
        data = UserCreate(
            wallet_address=WALLET, username="alice", email="Alice@Example.com"
        )

        with pytest.raises(ConflictError) as exc_info:
            await UsersService(users_repo).create_user(data)

        assert exc_info.value.details == {"field": "email"}
        users_repo.get_by_email.assert_awaited_once_with("alice@example.com")


@pytest.mark.unit
class TestLookups:
    async def test_get_user_missing_raises_not_found(self, users_repo):
        users_repo.get_by_id.return_value = None
        user_id = uuid.uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await UsersService(users_repo).get_user(user_id)

        assert exc_info.value.entity == "User"
        assert exc_info.value.details["id"] == str(user_id)

    async def test_wallet_lookup_missing_raises_not_found(self, users_repo):
        with pytest.raises(NotFoundError):
            await UsersService(users_repo).get_by_wallet_address(WALLET)

    async def test_username_lookup_returns_user(self, users_repo):
        user = _make_user()
        users_repo.get_by_username.return_value = user

        result = await UsersService(users_repo).get_by_username("alice")

        assert result is user


@pytest.mark.unit
class TestUpdateUser:
    async def test_only_sent_fields_are_written(self, users_repo):
        user = _make_user()
        users_repo.get_by_id.return_value = user
        users_repo.update.return_value = user

        await UsersService(users_repo).update_user(
            user.id, UserUpdate(bio="Rust and Solidity", name=None)
        )

        users_repo.update.assert_awaited_once_with(user, {"bio": "Rust and Solidity"})

    async def test_keeping_own_username_is_not_a_conflict(self, users_repo):
        user = _make_user()
        users_repo.get_by_id.return_value = user
        users_repo.get_by_username.return_value = user
        users_repo.update.return_value = user

        await UsersService(users_repo).update_user(
            user.id, UserUpdate(username="alice")
        )

        users_repo.update.assert_awaited_once()

    async def test_taking_another_users_username_conflicts(self, users_repo):
        user = _make_user()
        users_repo.get_by_id.return_value = user
        users_repo.get_by_username.return_value = _make_user(username="bob")

        with pytest.raises(ConflictError):
            await UsersService(users_repo).update_user(
                user.id, UserUpdate(username="bob")
            )

        users_repo.update.assert_not_awaited()


@pytest.mark.unit
class TestDeleteUser:
    async def test_missing_user_raises_not_found(self, users_repo):
        users_repo.delete.return_value = False

        with pytest.raises(NotFoundError):
            await UsersService(users_repo).delete_user(uuid.uuid4())

    async def test_record_login_touches_user(self, users_repo):
        user = _make_user()
        users_repo.get_by_id.return_value = user
        users_repo.touch_last_login.return_value = user

        result = await UsersService(users_repo).record_login(user.id)

        assert result is user
        users_repo.touch_last_login.assert_awaited_once_with(user)
