"""Unit tests for transactions_service.

Tests cover:
- validate_status_transition for every allowed and forbidden move
- completed_at stamping when a transaction completes
- sender/recipient and hash checks on create
"""

import uuid
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from core.errors import (
    BusinessRuleError,
    ConflictError,
    InvalidStatusTransitionError,
    NotFoundError,
)
from models import TransactionStatus, TransactionType
from schemas import TransactionCreate, TransactionUpdate
from services.transactions_service import (
    ALLOWED_TRANSITIONS,
    TransactionsService,
    validate_status_transition,
)

TERMINAL = [
    TransactionStatus.COMPLETED,
    TransactionStatus.FAILED,
    TransactionStatus.CANCELLED,
]


def _make_transaction(status=TransactionStatus.PENDING):
    return SimpleNamespace(
        id=uuid.uuid4(),
        status=status,
        type=TransactionType.PAYMENT,
        currency="USD",
    )


@pytest.fixture
def repos():
    transactions, users = AsyncMock(), AsyncMock()
    transactions.get_by_hash.return_value = None
    transactions.update.side_effect = lambda txn, changes: txn
    return transactions, users


@pytest.mark.unit
class TestValidateStatusTransition:
    @pytest.mark.parametrize("target", TERMINAL)
    def test_pending_can_settle(self, target):
        validate_status_transition(TransactionStatus.PENDING, target)

    @pytest.mark.parametrize("current", TERMINAL)
    def test_terminal_states_are_final(self, current):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            validate_status_transition(current, TransactionStatus.PENDING)

        assert exc_info.value.status_code == 409
        assert exc_info.value.details == {
            "current_status": current.value,
            "requested_status": "pending",
        }

    @pytest.mark.parametrize("status", list(TransactionStatus))
    def test_same_status_is_a_no_op(self, status):
        validate_status_transition(status, status)

    def test_completed_cannot_become_failed(self):
        with pytest.raises(InvalidStatusTransitionError):
            validate_status_transition(
                TransactionStatus.COMPLETED, TransactionStatus.FAILED
            )

    def test_every_status_has_an_entry(self):
        assert set(ALLOWED_TRANSITIONS) == set(TransactionStatus)


@pytest.mark.unit
class TestCreateTransaction:
    def _data(self, from_user_id, to_user_id, **kwargs) -> TransactionCreate:
        return TransactionCreate(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            amount=Decimal("12.5"),
            type=TransactionType.PAYMENT,
            **kwargs,
        )

    async def test_self_transfer_rejected(self, repos):
        transactions, users = repos
        user_id = uuid.uuid4()

        with pytest.raises(BusinessRuleError):
            await TransactionsService(transactions, users).create_transaction(
                self._data(user_id, user_id)
            )

        users.get_by_id.assert_not_awaited()

    async def test_unknown_recipient_is_not_found(self, repos):
        transactions, users = repos
        sender = SimpleNamespace(id=uuid.uuid4())
        users.get_by_id.side_effect = [sender, None]

        with pytest.raises(NotFoundError):
            await TransactionsService(transactions, users).create_transaction(
                self._data(sender.id, uuid.uuid4())
            )

        transactions.create.assert_not_awaited()

    async def test_reused_hash_conflicts(self, repos):
        transactions, users = repos
        users.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        transactions.get_by_hash.return_value = _make_transaction()

        with pytest.raises(ConflictError) as exc_info:
            await TransactionsService(transactions, users).create_transaction(
                self._data(uuid.uuid4(), uuid.uuid4(), transaction_hash="0xfeed")
            )

        assert exc_info.value.details == {"field": "transaction_hash"}

    async def test_creates_and_emits_event(self, repos):
        transactions, users = repos
        users.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        transactions.create.return_value = _make_transaction()

        with patch("services.transactions_service.log_business_event") as mock_event:
            await TransactionsService(transactions, users).create_transaction(
                self._data(uuid.uuid4(), uuid.uuid4())
            )

        transactions.create.assert_awaited_once()
        mock_event.assert_called_once_with(
            "transactions.created", properties={"type": "payment"}
        )


@pytest.mark.unit
class TestUpdateTransaction:
    async def test_completing_stamps_completed_at(self, repos):
        transactions, users = repos
        txn = _make_transaction()
        transactions.get_by_id.return_value = txn

        with patch("services.transactions_service.log_business_event"):
            await TransactionsService(transactions, users).update_transaction(
                txn.id, TransactionUpdate(status=TransactionStatus.COMPLETED)
            )

        changes = transactions.update.call_args.args[1]
        assert changes["status"] == TransactionStatus.COMPLETED
        assert changes["completed_at"] is not None

    async def test_failing_does_not_stamp_completed_at(self, repos):
        transactions, users = repos
        txn = _make_transaction()
        transactions.get_by_id.return_value = txn

        with patch("services.transactions_service.log_business_event"):
            await TransactionsService(transactions, users).update_transaction(
                txn.id, TransactionUpdate(status=TransactionStatus.FAILED)
            )

        assert "completed_at" not in transactions.update.call_args.args[1]

    async def test_reopening_is_rejected(self, repos):
        transactions, users = repos
        txn = _make_transaction(status=TransactionStatus.CANCELLED)
        transactions.get_by_id.return_value = txn

        with pytest.raises(InvalidStatusTransitionError):
            await TransactionsService(transactions, users).update_transaction(
                txn.id, TransactionUpdate(status=TransactionStatus.PENDING)
            )

        transactions.update.assert_not_awaited()

    async def test_same_status_emits_nothing(self, repos):
        transactions, users = repos
        txn = _make_transaction(status=TransactionStatus.COMPLETED)
        transactions.get_by_id.return_value = txn

        with patch("services.transactions_service.log_business_event") as mock_event:
            await TransactionsService(transactions, users).update_transaction(
                txn.id, TransactionUpdate(status=TransactionStatus.COMPLETED)
            )

        assert "completed_at" not in transactions.update.call_args.args[1]
        mock_event.assert_not_called()
