from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.checkout_v1 import (
    DeliveryModeV1,
    FieldErrorV1,
    PaymentMethodV1,
    PostalErrorV1,
)
from pydantic import BaseModel, ConfigDict, Field
from services.api.app.models.cart import CartItem, CartState
from services.api.app.models.store import StoreConfig


class AddressRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    street: str
    neighborhood: str
    city: str
    state: str


class OrderDraft(BaseModel):
    """Immutable snapshot of every checkout input.

    Edits never mutate a draft; they produce a new one with ``model_copy(update=...)``.
    Fields that only matter for home delivery are kept while the mode is counter pickup.
    """

    model_config = ConfigDict(frozen=True)

    delivery_mode: DeliveryModeV1 = DeliveryModeV1.COUNTER_PICKUP
    customer_name: str = ""
    customer_phone: str = ""
    raw_postal_code: str = ""
    resolved_address: AddressRecord | None = None
    house_number: str = ""
    complement: str = ""
    delivery_notes: str = ""
    order_notes: str = ""
    payment_method: PaymentMethodV1 = PaymentMethodV1.PIX


class CheckoutStartRequest(BaseModel):
    cart: CartState


class DeliveryModeRequest(BaseModel):
    delivery_mode: DeliveryModeV1


class DraftUpdateRequest(BaseModel):
    customer_name: str | None = None
    customer_phone: str | None = None
    house_number: str | None = None
    complement: str | None = None
    delivery_notes: str | None = None
    order_notes: str | None = None
    payment_method: PaymentMethodV1 | None = None


class PostalCodeRequest(BaseModel):
    postal_code: str = Field(..., max_length=32)


class CheckoutView(BaseModel):
    checkout_id: str
    draft: OrderDraft
    items: list[CartItem]
    store: StoreConfig

    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    minimum_order_value: Decimal
    minimum_shortfall: Decimal

    structurally_valid: bool
    economically_valid: bool
    can_dispatch: bool

    field_errors: list[FieldErrorV1] = Field(default_factory=list)
    postal_error: PostalErrorV1 | None = None


class SummaryResponse(BaseModel):
    text: str


class DispatchResponse(BaseModel):
    dispatch_url: str
    text: str
