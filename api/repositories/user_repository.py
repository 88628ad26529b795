"""User repository for database operations."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, or_

from models import User
from repositories.base import BaseRepository
from repositories.utils import escape_like, log_slow_query


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    model = User

    async def get_by_wallet_address(self, wallet_address: str) -> User | None:
        """Get a user by wallet address (unique constraint ensures one)."""
        return await self.get_by_field(User.wallet_address, wallet_address)

    async def get_by_username(self, username: str) -> User | None:
        return await self.get_by_field(User.username, username)

    async def get_by_email(self, email: str) -> User | None:
        """Expects email to be pre-normalized (lowercase) by the DTO layer."""
        return await self.get_by_field(User.email, email)

    async def get_many_by_ids(self, user_ids: list[UUID]) -> list[User]:
        """Get multiple users in a single query. Missing IDs are silently skipped."""
        if not user_ids:
            return []
        return await self.find_all(User.id.in_(user_ids))

    @log_slow_query("list_users")
    async def list_users(
        self,
        *,
        is_freelancer: bool | None = None,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> list[User]:
        """Newest first. ``search`` matches name, email or username, any case."""
        conditions = []
        if is_freelancer is not None:
            conditions.append(User.is_freelancer == is_freelancer)
        if is_active is not None:
            conditions.append(User.is_active == is_active)
        if search:
            pattern = f"%{escape_like(search.lower())}%"
            conditions.append(
                or_(
                    func.lower(User.name).like(pattern, escape="\\"),
                    func.lower(User.email).like(pattern, escape="\\"),
                    func.lower(User.username).like(pattern, escape="\\"),
                )
            )
        return await self.find_all(*conditions, order_by=[User.created_at.desc()])

    async def touch_last_login(self, user: User) -> User:
        return await self.update(user, {"last_login": datetime.now(UTC)})
