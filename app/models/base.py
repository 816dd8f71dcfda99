from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

# Deterministic constraint names; the store recognizes email conflicts by "ix_users_email".
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(MappedAsDataclass, DeclarativeBase):
    """Base class for SQLAlchemy models using dataclass support."""

    __abstract__ = True

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
