"""Checkout gates.

Two independent gates decide whether an order may be sent: the draft has to be
structurally complete for its delivery mode, and the cart subtotal has to reach the
store minimum. The delivery fee never counts toward the minimum.
"""

from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.checkout_v1 import DeliveryModeV1, FieldErrorV1
from services.api.app.models.cart import CartState
from services.api.app.models.checkout import OrderDraft
from services.api.app.models.store import StoreConfig
from services.api.app.services.address_resolver import POSTAL_CODE_DIGITS
from services.api.app.services.delivery_mode import fee_applies, required_fields
from services.api.app.services.formatting import digits_only

MIN_PHONE_DIGITS = 10


def is_structurally_valid(draft: OrderDraft) -> bool:
    if draft.delivery_mode is DeliveryModeV1.COUNTER_PICKUP:
        return True

    return (
        draft.customer_name.strip() != ""
        and len(digits_only(draft.customer_phone)) >= MIN_PHONE_DIGITS
        and draft.resolved_address is not None
        and draft.house_number.strip() != ""
    )


def is_economically_valid(cart: CartState, config: StoreConfig) -> bool:
    return cart.subtotal >= config.minimum_order_value


def can_dispatch(cart: CartState, draft: OrderDraft, config: StoreConfig) -> bool:
    return is_structurally_valid(draft) and is_economically_valid(cart, config)


def minimum_shortfall(cart: CartState, config: StoreConfig) -> Decimal:
    return max(config.minimum_order_value - cart.subtotal, Decimal("0.00"))


def order_totals(
    cart: CartState, draft: OrderDraft, config: StoreConfig
) -> tuple[Decimal, Decimal, Decimal]:
    """Return (subtotal, delivery fee, total) for the draft's delivery mode."""

    subtotal = cart.subtotal
    fee = config.delivery_fee if fee_applies(draft.delivery_mode) else Decimal("0.00")
    return subtotal, fee, subtotal + fee


def field_errors(draft: OrderDraft) -> list[FieldErrorV1]:
    """Inline problems for the fields the current delivery mode makes mandatory."""

    errors: list[FieldErrorV1] = []
    for name in required_fields(draft.delivery_mode):
        message = _missing_reason(draft, name)
        if message is not None:
            errors.append(FieldErrorV1(field=name, message=message))
    return errors


def _missing_reason(draft: OrderDraft, name: str) -> str | None:
    if name == "customer_name":
        return None if draft.customer_name.strip() else "Name is required"

    if name == "customer_phone":
        if len(digits_only(draft.customer_phone)) >= MIN_PHONE_DIGITS:
            return None
        return f"Phone must have at least {MIN_PHONE_DIGITS} digits"

    if name == "raw_postal_code":
        if len(digits_only(draft.raw_postal_code)) == POSTAL_CODE_DIGITS:
            return None
        return "Postal code must have 8 digits"

    if name == "resolved_address":
        # An incomplete postal code is already reported on its own field.
        if draft.resolved_address is not None:
            return None
        if len(digits_only(draft.raw_postal_code)) != POSTAL_CODE_DIGITS:
            return None
        return "Address has not been found yet"

    if name == "house_number":
        return None if draft.house_number.strip() else "House number is required"

    raise ValueError(f"Unknown required field: {name}")
