"""Database session management for the SQL entry store."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def make_session_factory(database_url: str, echo: bool = False) -> sessionmaker:
    """Create an engine for the given URL, ensure tables exist, and return a session factory."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine_kwargs = {}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # In-memory SQLite lives on one connection only
        engine_kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, echo=echo, connect_args=connect_args, **engine_kwargs)

    from sweethome.models.entry import EntryRow  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)
