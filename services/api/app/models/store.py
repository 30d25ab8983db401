from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from services.api.app.models.cart import to_money

DEFAULT_STORE_NAME = "Pizzeria"
DEFAULT_CONTACT_ID = "5511999999999"
DEFAULT_DELIVERY_FEE = Decimal("5.00")
DEFAULT_MINIMUM_ORDER_VALUE = Decimal("20.00")


class StoreConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    # Messaging identifier orders are sent to. None means "use the default contact".
    contact_id: str | None = None
    delivery_fee: Decimal = Field(..., ge=0)
    minimum_order_value: Decimal = Field(..., ge=0)

    @field_validator("delivery_fee", "minimum_order_value")
    @classmethod
    def _quantize(cls, value: Decimal) -> Decimal:
        return to_money(value)


def default_store_config() -> StoreConfig:
    return StoreConfig(
        name=DEFAULT_STORE_NAME,
        contact_id=DEFAULT_CONTACT_ID,
        delivery_fee=DEFAULT_DELIVERY_FEE,
        minimum_order_value=DEFAULT_MINIMUM_ORDER_VALUE,
    )
