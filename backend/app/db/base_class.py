from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base, declared_attr
from typing import Any

# Stable constraint names so Alembic autogenerate produces predictable diffs
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

class CustomBase:
    # Generate __tablename__ automatically (Product -> products); irregular plurals set it explicitly
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"

Base: Any = declarative_base(cls=CustomBase, metadata=MetaData(naming_convention=NAMING_CONVENTION))
