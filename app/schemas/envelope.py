from pydantic import BaseModel

from app.schemas.user import UserRead


class UserResponse(BaseModel):
    success: bool = True
    data: UserRead


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[UserRead]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: list[FieldError] | None = None


__all__ = [
    "ErrorResponse",
    "FieldError",
    "MessageResponse",
    "UserListResponse",
    "UserResponse",
]
