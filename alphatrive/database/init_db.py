import logging
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from alphatrive.models import Base  # registers every table on Base.metadata

logger = logging.getLogger(__name__)

# Bound by init_db() once at startup and shared for the process lifetime.
engine: Optional[Engine] = None
SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)


def _engine_options(database_url: str) -> dict:
    if not database_url.startswith("sqlite"):
        # MySQL drops idle connections; recycle before that happens
        return {"pool_pre_ping": True, "pool_recycle": 3600}
    options = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every session sees an empty database
        options["poolclass"] = StaticPool
    return options


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db(database_url: str) -> Engine:
    global engine
    if engine is not None:
        engine.dispose()
    engine = create_engine(database_url, **_engine_options(database_url))
    if database_url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    SessionLocal.configure(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialised: {engine.url.render_as_string(hide_password=True)}")
    return engine


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
