"""SQLAlchemy declarative Base shared by the catalog models."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Stable constraint names so Alembic migrations match the models on every backend.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# Largest value an INTEGER primary key can hold on every supported backend.
MAX_INTEGER_ID = 2**31 - 1

class Base(DeclarativeBase):
    """Declarative base for users, categories and products."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
