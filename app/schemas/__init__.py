from app.schemas.envelope import ErrorResponse, FieldError, MessageResponse, UserListResponse, UserResponse
from app.schemas.user import UserCreate, UserRead, UserUpdate

__all__ = [
	"ErrorResponse",
	"FieldError",
	"MessageResponse",
	"UserCreate",
	"UserListResponse",
	"UserRead",
	"UserResponse",
	"UserUpdate",
]
