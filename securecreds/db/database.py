"""SQLAlchemy engine and session factory."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; for file-backed SQLite the parent directory is created."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    # Bound parameters include passwords; keep them out of error text and echo output.
    return create_engine(url, echo=echo, hide_parameters=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables. Called at startup."""
    from securecreds.db.models import Base
    Base.metadata.create_all(engine)
