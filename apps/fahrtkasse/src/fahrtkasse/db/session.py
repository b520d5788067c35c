"""SQLAlchemy engine and session factory definitions."""

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from fahrtkasse.core.settings import get_settings


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create the session factory shared by API requests and store backends."""

    return sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    """Return the process-wide session factory bound to DATABASE_URL."""

    engine = create_engine(get_settings().database_url, pool_pre_ping=True)
    return create_session_factory(engine)


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session per request lifecycle."""

    with get_session_factory()() as session:
        yield session
