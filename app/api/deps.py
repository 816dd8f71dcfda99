from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.services.user_store import UserStore

__all__ = ["get_db", "get_user_store"]


def get_user_store(db: AsyncSession = Depends(get_db)) -> UserStore:
    return UserStore(db)
