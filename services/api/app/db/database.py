from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

_LOCAL_DB_PATH = Path(".local") / "checkout.db"

_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None
_SESSIONMAKER: sessionmaker | None = None


def _database_url() -> str:
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return url

    # Local-only default. Production must provide DATABASE_URL explicitly.
    _LOCAL_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+pysqlite:///{_LOCAL_DB_PATH}"


def get_engine() -> Engine:
    """Return a cached SQLAlchemy engine.

    The cache is keyed on DATABASE_URL so tests can point each run at a fresh sqlite
    file; switching URLs disposes the previous engine's pool.
    """

    global _ENGINE, _ENGINE_URL, _SESSIONMAKER

    url = _database_url()

    if _ENGINE is not None and _ENGINE_URL == url:
        return _ENGINE

    if _ENGINE is not None:
        _ENGINE.dispose()

    echo = os.getenv("CHECKOUT_DB_ECHO", "false").strip().lower() in {"1", "true", "yes", "y"}
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    _ENGINE = create_engine(url, echo=echo, connect_args=connect_args)
    _ENGINE_URL = url
    _SESSIONMAKER = sessionmaker(bind=_ENGINE, class_=Session, autoflush=False)
    return _ENGINE


def db_session() -> Session:
    get_engine()  # ensure _SESSIONMAKER is created
    assert _SESSIONMAKER is not None
    return _SESSIONMAKER()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped session."""

    db = db_session()
    try:
        yield db
    finally:
        db.close()
