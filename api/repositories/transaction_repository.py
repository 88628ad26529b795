"""Transaction repository."""

from uuid import UUID

from sqlalchemy import or_

from models import Transaction, TransactionStatus, TransactionType
from repositories.base import BaseRepository
from repositories.utils import log_slow_query


class TransactionRepository(BaseRepository[Transaction]):
    model = Transaction

    async def get_by_hash(self, transaction_hash: str) -> Transaction | None:
        return await self.get_by_field(Transaction.transaction_hash, transaction_hash)

    @log_slow_query("list_transactions")
    async def list_transactions(
        self,
        *,
        user_id: UUID | None = None,
        status: TransactionStatus | None = None,
        type: TransactionType | None = None,
    ) -> list[Transaction]:
        """Filter by participant (either side), status and type; newest first."""
        conditions = []
        if user_id is not None:
            conditions.append(
                or_(
                    Transaction.from_user_id == user_id,
                    Transaction.to_user_id == user_id,
                )
            )
        if status is not None:
            conditions.append(Transaction.status == status)
        if type is not None:
            conditions.append(Transaction.type == type)
        return await self.find_all(
            *conditions, order_by=[Transaction.created_at.desc()]
        )
