from __future__ import annotations

import structlog
from pydantic import ValidationError
from services.api.app.db.models import StoreSettings
from services.api.app.models.store import StoreConfig, default_store_config
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = structlog.get_logger(__name__)


def load_store_config(db: Session) -> StoreConfig:
    """Read the store configuration record, falling back to defaults.

    Checkout has to stay usable while the configuration backend is degraded, so a
    missing table, a missing row, a driver error or out-of-range values all yield the
    default configuration. The fallback is logged, never surfaced to the customer.
    """

    try:
        row = db.scalars(select(StoreSettings).order_by(StoreSettings.id).limit(1)).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("store_config_fallback", reason="read_failed", error=str(e))
        return default_store_config()

    if row is None:
        logger.warning("store_config_fallback", reason="missing")
        return default_store_config()

    try:
        return StoreConfig(
            name=row.name,
            contact_id=row.contact_id,
            delivery_fee=row.delivery_fee,
            minimum_order_value=row.minimum_order_value,
        )
    except ValidationError as e:
        logger.warning("store_config_fallback", reason="malformed", error=str(e))
        return default_store_config()
