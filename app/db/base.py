"""Import all SQLAlchemy models here so ``Base.metadata`` is complete for ``create_all``."""

from app.models.base import Base
from app.models.user import User

__all__ = ["Base", "User"]
