from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_user_store
from app.schemas.envelope import ErrorResponse, MessageResponse, UserListResponse, UserResponse
from app.schemas.user import UserCreate, UserRead, UserUpdate
from app.services.exceptions import (
    DuplicateEmailError,
    MalformedIdentifierError,
    UserNotFoundError,
    UserStoreError,
)
from app.services.user_store import UserStore

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _store_error_response(exc: UserStoreError, failure_message: str) -> JSONResponse:
    """Map a store error to its HTTP status; anything unclassified is a 500."""

    if isinstance(exc, MalformedIdentifierError):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid user ID format")
    if isinstance(exc, UserNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, "User not found")
    if isinstance(exc, DuplicateEmailError):
        return _error(status.HTTP_400_BAD_REQUEST, "Email already exists")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message)


@router.get("", response_model=UserListResponse)
async def list_users(store: UserStore = Depends(get_user_store)) -> UserListResponse | JSONResponse:
    try:
        users = await store.list_users()
    except UserStoreError as exc:
        return _store_error_response(exc, "Failed to fetch users")
    data = [UserRead.model_validate(user) for user in users]
    return UserListResponse(count=len(data), data=data)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, store: UserStore = Depends(get_user_store)) -> UserResponse | JSONResponse:
    try:
        user = await store.get_user(user_id)
    except UserStoreError as exc:
        return _store_error_response(exc, "Failed to fetch user")
    return UserResponse(data=UserRead.model_validate(user))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    store: UserStore = Depends(get_user_store),
) -> UserResponse | JSONResponse:
    try:
        user = await store.create_user(user_in)
    except UserStoreError as exc:
        return _store_error_response(exc, "Failed to create user")
    return UserResponse(data=UserRead.model_validate(user))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    user_in: UserUpdate,
    store: UserStore = Depends(get_user_store),
) -> UserResponse | JSONResponse:
    try:
        user = await store.update_user(user_id, user_in)
    except UserStoreError as exc:
        return _store_error_response(exc, "Failed to update user")
    return UserResponse(data=UserRead.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, store: UserStore = Depends(get_user_store)) -> MessageResponse | JSONResponse:
    try:
        await store.delete_user(user_id)
    except UserStoreError as exc:
        return _store_error_response(exc, "Failed to delete user")
    return MessageResponse(message="User deleted successfully")
