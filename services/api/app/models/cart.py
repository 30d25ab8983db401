from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CENTS = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class CartItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    size: str
    flavors: tuple[str, ...] = ()
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., ge=0)

    @field_validator("unit_price")
    @classmethod
    def _quantize_price(cls, value: Decimal) -> Decimal:
        return to_money(value)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class CartState(BaseModel):
    """Snapshot of the storefront cart at the moment checkout begins.

    The cart is owned by the client; checkout only reads it. ``total`` is optional and,
    when sent, has to agree with the sum of the line totals.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[CartItem, ...] = Field(..., min_length=1)
    total: Decimal | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _total_matches_items(self) -> CartState:
        if self.total is not None and to_money(self.total) != self.subtotal:
            raise ValueError(
                f"Cart total {to_money(self.total)} does not match item sum {self.subtotal}"
            )
        return self

    @property
    def subtotal(self) -> Decimal:
        return to_money(sum((item.line_total for item in self.items), Decimal("0")))
