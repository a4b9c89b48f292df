"""Database engine, session factory, and declarative base.

Used only by the ``database`` storage backend, which keeps the batch slot
as a row in ``storage_slots``.  SQLite by default; any SQLAlchemy URL works.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    pass


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the engine and make sure the slot table exists."""
    # Deferred so the model registers on Base before create_all
    from potatoqc.models.storage_slot import StorageSlot  # noqa: F401

    engine = create_engine(database_url, echo=echo, pool_pre_ping=True)
    Base.metadata.create_all(engine)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False)
