"""Helpers shared by the service classes."""

from typing import Any, TypeVar

from pydantic import BaseModel

from core.database import Base
from core.errors import NotFoundError
from repositories.base import BaseRepository

ModelT = TypeVar("ModelT", bound=Base)


async def get_or_raise(
    repo: BaseRepository[ModelT], key: Any, entity: str
) -> ModelT:
    """Fetch by primary key or raise NotFoundError carrying the entity and id."""
    instance = await repo.get_by_id(key)
    if instance is None:
        raise NotFoundError(entity, _format_key(key))
    return instance


async def delete_or_raise(repo: BaseRepository[Any], key: Any, entity: str) -> None:
    if not await repo.delete(key):
        raise NotFoundError(entity, _format_key(key))


def changed_fields(data: BaseModel) -> dict[str, Any]:
    """Fields the client actually sent with a value.

    Omitted fields and explicit nulls are both left out, so a partial update
    never nulls a column by accident.
    """
    return data.model_dump(exclude_unset=True, exclude_none=True)


def _format_key(key: Any) -> str:
    if isinstance(key, tuple):
        return "/".join(str(part) for part in key)
    return str(key)
