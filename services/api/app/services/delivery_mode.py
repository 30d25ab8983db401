from __future__ import annotations

from packages.shared.schemas.checkout_v1 import DeliveryModeV1
from services.api.app.models.checkout import OrderDraft

INITIAL_MODE = DeliveryModeV1.COUNTER_PICKUP

_HOME_DELIVERY_REQUIRED = (
    "customer_name",
    "customer_phone",
    "raw_postal_code",
    "resolved_address",
    "house_number",
)


def required_fields(mode: DeliveryModeV1) -> tuple[str, ...]:
    if mode is DeliveryModeV1.HOME_DELIVERY:
        return _HOME_DELIVERY_REQUIRED
    return ()


def fee_applies(mode: DeliveryModeV1) -> bool:
    return mode is DeliveryModeV1.HOME_DELIVERY


def switch_mode(draft: OrderDraft, mode: DeliveryModeV1) -> OrderDraft:
    """Move the draft to ``mode``.

    Customer and address fields are left untouched: under counter pickup they are inert
    and come back as soon as the customer switches to home delivery again.
    """

    if draft.delivery_mode is mode:
        return draft
    return draft.model_copy(update={"delivery_mode": mode})


def mode_label(mode: DeliveryModeV1) -> str:
    if mode is DeliveryModeV1.HOME_DELIVERY:
        return "Delivery"
    return "Counter Pickup"
