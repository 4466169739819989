from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


def include_object(object, name, type_, reflected, compare_to):
    """Alembic autogenerate filter: only consider tables mapped on ``Base``.

    The database may be shared with other services, so reflected tables we do
    not own (and their indexes) are never proposed for a drop.
    """
    tables = Base.metadata.tables
    if type_ == "table":
        return name in tables
    if type_ == "index" and hasattr(object, "table"):
        return object.table.name in tables
    return True
