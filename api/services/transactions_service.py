"""Payment transactions between users.

Status only ever moves forward: a pending transaction may settle into any
terminal state (completed, failed, cancelled); terminal states are final.
Re-sending the current status is a no-op.
"""

from datetime import UTC, datetime
from uuid import UUID

from core.errors import BusinessRuleError, ConflictError, InvalidStatusTransitionError
from core.logger import get_logger
from core.telemetry import log_business_event
from models import Transaction, TransactionStatus, TransactionType
from repositories.transaction_repository import TransactionRepository
from repositories.user_repository import UserRepository
from schemas import TransactionCreate, TransactionUpdate
from services.common import changed_fields, delete_or_raise, get_or_raise

logger = get_logger(__name__)

ALLOWED_TRANSITIONS: dict[TransactionStatus, frozenset[TransactionStatus]] = {
    TransactionStatus.PENDING: frozenset(
        {
            TransactionStatus.COMPLETED,
            TransactionStatus.FAILED,
            TransactionStatus.CANCELLED,
        }
    ),
    TransactionStatus.COMPLETED: frozenset(),
    TransactionStatus.FAILED: frozenset(),
    TransactionStatus.CANCELLED: frozenset(),
}


def validate_status_transition(
    current: TransactionStatus, requested: TransactionStatus
) -> None:
    if requested == current:
        return
    if requested not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(current.value, requested.value)


class TransactionsService:
    def __init__(self, transactions: TransactionRepository, users: UserRepository):
        self.transactions = transactions
        self.users = users

    async def _ensure_hash_free(
        self, transaction_hash: str, exclude_id: UUID | None = None
    ) -> None:
        existing = await self.transactions.get_by_hash(transaction_hash)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                "A transaction with this hash already exists",
                details={"field": "transaction_hash"},
            )

    async def create_transaction(self, data: TransactionCreate) -> Transaction:
        if data.from_user_id == data.to_user_id:
            raise BusinessRuleError(
                "Sender and recipient must be different users",
                details={"from_user_id": str(data.from_user_id)},
            )
        await get_or_raise(self.users, data.from_user_id, "User")
        await get_or_raise(self.users, data.to_user_id, "User")
        if data.transaction_hash is not None:
            await self._ensure_hash_free(data.transaction_hash)

        transaction = await self.transactions.create(**data.model_dump())
        logger.info(
            "transaction.created",
            transaction_id=str(transaction.id),
            type=transaction.type.value,
            currency=transaction.currency,
        )
        log_business_event(
            "transactions.created", properties={"type": transaction.type.value}
        )
        return transaction

    async def list_transactions(
        self,
        *,
        user_id: UUID | None = None,
        status: TransactionStatus | None = None,
        type: TransactionType | None = None,
    ) -> list[Transaction]:
        return await self.transactions.list_transactions(
            user_id=user_id, status=status, type=type
        )

    async def get_transaction(self, transaction_id: UUID) -> Transaction:
        return await get_or_raise(self.transactions, transaction_id, "Transaction")

    async def update_transaction(
        self, transaction_id: UUID, data: TransactionUpdate
    ) -> Transaction:
        transaction = await get_or_raise(
            self.transactions, transaction_id, "Transaction"
        )
        changes = changed_fields(data)

        if "transaction_hash" in changes:
            await self._ensure_hash_free(
                changes["transaction_hash"], exclude_id=transaction.id
            )

        previous = transaction.status
        requested = changes.get("status")
        if requested is not None:
            validate_status_transition(previous, requested)
            if (
                requested == TransactionStatus.COMPLETED
                and previous != TransactionStatus.COMPLETED
            ):
                changes["completed_at"] = datetime.now(UTC)

        transaction = await self.transactions.update(transaction, changes)

        if requested is not None and requested != previous:
            logger.info(
                "transaction.status_changed",
                transaction_id=str(transaction.id),
                from_status=previous.value,
                to_status=requested.value,
            )
            log_business_event(
                "transactions.settled", properties={"status": requested.value}
            )
        return transaction

    async def delete_transaction(self, transaction_id: UUID) -> None:
        await delete_or_raise(self.transactions, transaction_id, "Transaction")
