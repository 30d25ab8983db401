from __future__ import annotations

import os

import structlog
from services.api.app.db.database import get_engine
from services.api.app.db.models import Base

logger = structlog.get_logger(__name__)


def auto_create_enabled() -> bool:
    return os.getenv("CHECKOUT_DB_AUTO_CREATE", "true").strip().lower() in {"1", "true", "yes", "y"}


def init_db() -> None:
    if not auto_create_enabled():
        logger.info("db_auto_create_skipped")
        return

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("db_tables_ready", tables=sorted(Base.metadata.tables))
