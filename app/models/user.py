import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base

NAME_MAX_LENGTH = 50

# MySQL DATETIME truncates to whole seconds unless fsp is set.
Timestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite and MySQL DATETIME columns drop tzinfo anyway."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    """A user record; ``email`` is stored normalized and carries the unique index."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, init=False, default_factory=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(Timestamp, init=False, default_factory=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(Timestamp, init=False, default_factory=utcnow, nullable=False)
