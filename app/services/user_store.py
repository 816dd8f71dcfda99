from __future__ import annotations

import uuid
from datetime import datetime, timedelta

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, utcnow
from app.schemas.user import UserCreate, UserUpdate
from app.services.exceptions import (
    DuplicateEmailError,
    MalformedIdentifierError,
    StorageError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)


def parse_user_id(user_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(user_id)
    except ValueError:
        raise MalformedIdentifierError(user_id) from None


def _is_email_conflict(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed: users.email"; mysql/postgres name the ix_users_email index.
    return "email" in str(exc.orig).lower()


def _next_timestamp(previous: datetime | None) -> datetime:
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class UserStore:
    """Persistence operations for users on top of a single async session.

    Every method raises a :class:`~app.services.exceptions.UserStoreError`
    subclass on failure; driver exceptions never escape.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_users(self) -> list[User]:
        try:
            result = await self._session.execute(select(User).order_by(User.created_at, User.id))
        except SQLAlchemyError as exc:
            raise self._failure("list", exc) from exc
        return list(result.scalars().all())

    async def get_user(self, user_id: str) -> User:
        key = parse_user_id(user_id)
        try:
            user = await self._session.get(User, key)
        except SQLAlchemyError as exc:
            raise self._failure("get", exc) from exc
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def create_user(self, payload: UserCreate) -> User:
        user = User(
            name=payload.name,
            email=payload.email,
            age=payload.age,
            is_active=payload.is_active,
        )
        user.updated_at = user.created_at
        self._session.add(user)
        await self._commit("create")
        logger.info("user_created", user_id=str(user.id))
        return user

    async def update_user(self, user_id: str, payload: UserUpdate) -> User:
        user = await self.get_user(user_id)
        changes = payload.changes()
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = _next_timestamp(user.updated_at)
        await self._commit("update")
        logger.info("user_updated", user_id=user_id, fields=sorted(changes))
        return user

    async def delete_user(self, user_id: str) -> None:
        user = await self.get_user(user_id)
        await self._session.delete(user)
        await self._commit("delete")
        logger.info("user_deleted", user_id=user_id)

    async def _commit(self, operation: str) -> None:
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            if _is_email_conflict(exc):
                raise DuplicateEmailError("Email already exists") from exc
            raise self._failure(operation, exc) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise self._failure(operation, exc) from exc

    @staticmethod
    def _failure(operation: str, exc: SQLAlchemyError) -> StorageError:
        logger.error("user_store_failure", operation=operation, error=str(exc), exc_info=exc)
        return StorageError(f"User {operation} failed")
