"""User service for user-related business logic."""

from uuid import UUID

from core.errors import ConflictError, NotFoundError
from core.logger import get_logger
from core.telemetry import log_business_event
from models import User
from repositories.user_repository import UserRepository
from schemas import UserCreate, UserUpdate
from services.common import changed_fields, delete_or_raise, get_or_raise

logger = get_logger(__name__)


class UsersService:
    """Account lifecycle: registration, lookups, profile updates, login stamps."""

    def __init__(self, users: UserRepository):
        self.users = users

    async def _ensure_unique(
        self,
        *,
        wallet_address: str | None = None,
        username: str | None = None,
        email: str | None = None,
        exclude_id: UUID | None = None,
    ) -> None:
        """Raise ConflictError naming the first natural key already taken.

        The database UNIQUE constraints still back this up for concurrent
        registrations; those surface as IntegrityError (409).
        """
        checks = (
            ("wallet_address", wallet_address, self.users.get_by_wallet_address),
            ("username", username, self.users.get_by_username),
            ("email", email, self.users.get_by_email),
        )
        for field, value, lookup in checks:
            if value is None:
                continue
            existing = await lookup(value)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(
                    f"A user with this {field} already exists",
                    details={"field": field},
                )

    async def create_user(self, data: UserCreate) -> User:
        await self._ensure_unique(
            wallet_address=data.wallet_address,
            username=data.username,
            email=data.email,
        )
        user = await self.users.create(**data.model_dump())
        logger.info(
            "user.created", user_id=str(user.id), is_freelancer=user.is_freelancer
        )
        log_business_event("users.registered")
        return user

    async def list_users(
        self,
        *,
        is_freelancer: bool | None = None,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> list[User]:
        return await self.users.list_users(
            is_freelancer=is_freelancer, is_active=is_active, search=search
        )

    async def get_user(self, user_id: UUID) -> User:
        return await get_or_raise(self.users, user_id, "User")

    async def get_by_wallet_address(self, wallet_address: str) -> User:
        user = await self.users.get_by_wallet_address(wallet_address)
        if user is None:
            raise NotFoundError("User", wallet_address)
        return user

    async def get_by_username(self, username: str) -> User:
        user = await self.users.get_by_username(username)
        if user is None:
            raise NotFoundError("User", username)
        return user

    async def update_user(self, user_id: UUID, data: UserUpdate) -> User:
        user = await get_or_raise(self.users, user_id, "User")
        changes = changed_fields(data)
        await self._ensure_unique(
            username=changes.get("username"),
            email=changes.get("email"),
            exclude_id=user.id,
        )
        user = await self.users.update(user, changes)
        logger.info("user.updated", user_id=str(user.id), fields=sorted(changes))
        return user

    async def record_login(self, user_id: UUID) -> User:
        user = await get_or_raise(self.users, user_id, "User")
        return await self.users.touch_last_login(user)

    async def delete_user(self, user_id: UUID) -> None:
        await delete_or_raise(self.users, user_id, "User")
        logger.info("user.deleted", user_id=str(user_id))
