import re
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.models.user import NAME_MAX_LENGTH

# Each repetition consumes a separator, so a near-miss fails in linear time.
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)
EMAIL_MAX_LENGTH = 254
AGE_MIN = 0
AGE_MAX = 120


def normalize_name(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("name_required", "Name is required")
    if not isinstance(value, str):
        return value
    value = value.strip()
    if len(value) > NAME_MAX_LENGTH:
        raise PydanticCustomError("name_too_long", f"Name cannot exceed {NAME_MAX_LENGTH} characters")
    return value


def normalize_email(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("email_required", "Email is required")
    if not isinstance(value, str):
        return value
    value = value.strip().lower()
    if len(value) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("email_invalid", "Please enter a valid email")
    return value


def check_age(value: int | None) -> int | None:
    if value is None:
        return value
    if value < AGE_MIN:
        raise PydanticCustomError("age_negative", "Age cannot be negative")
    if value > AGE_MAX:
        raise PydanticCustomError("age_invalid", "Age seems invalid")
    return value


class UserPayload(BaseModel):
    """Shared field rules for create and update bodies."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def _name(cls, value: Any) -> Any:
        return normalize_name(value)

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def _email(cls, value: Any) -> Any:
        return normalize_email(value)

    @field_validator("age", check_fields=False)
    @classmethod
    def _age(cls, value: int | None) -> int | None:
        return check_age(value)

    @field_validator("is_active", mode="before", check_fields=False)
    @classmethod
    def _is_active(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("is_active_required", "isActive must be a boolean")
        return value


class UserCreate(UserPayload):
    # Missing name/email still run through the validators so the error carries our message.
    name: str = Field(default=None, validate_default=True)
    email: str = Field(default=None, validate_default=True)
    age: int | None = None
    is_active: bool = True


class UserUpdate(UserPayload):
    """Partial update; only fields present in the body are applied."""

    name: str = None
    email: str = None
    age: int | None = None
    is_active: bool = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class UserRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    age: int | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
