"""Canonical order text sent to the store.

The text is a pure function of the cart, the draft and the store configuration, so the
same inputs always produce the same bytes.
"""

from __future__ import annotations

from typing import assert_never

from packages.shared.schemas.checkout_v1 import DeliveryModeV1, PaymentMethodV1
from services.api.app.models.cart import CartItem, CartState
from services.api.app.models.checkout import OrderDraft
from services.api.app.models.store import StoreConfig
from services.api.app.services.delivery_mode import mode_label
from services.api.app.services.formatting import format_currency
from services.api.app.services.validator import order_totals

CLOSING_LINE = "✅ Awaiting confirmation!"


def payment_label(method: PaymentMethodV1) -> str:
    if method is PaymentMethodV1.PIX:
        return "PIX"
    if method is PaymentMethodV1.CASH:
        return "Cash"
    if method is PaymentMethodV1.DEBIT_CARD:
        return "Debit Card"
    if method is PaymentMethodV1.CREDIT_CARD:
        return "Credit Card"
    assert_never(method)


def compose(cart: CartState, draft: OrderDraft, config: StoreConfig) -> str:
    lines: list[str] = [f"🍕 *NEW ORDER - {config.name}*", ""]

    lines.append("📋 *ORDER ITEMS:*")
    for index, item in enumerate(cart.items, start=1):
        lines.extend(_item_lines(index, item))
        lines.append("")

    lines.append(f"🚚 *FULFILLMENT:* {mode_label(draft.delivery_mode)}")
    lines.append("")

    if draft.delivery_mode is DeliveryModeV1.HOME_DELIVERY:
        lines.extend(_delivery_lines(draft))
        lines.append("")

    if draft.order_notes.strip():
        lines.append("📝 *ORDER NOTES:*")
        lines.append(draft.order_notes.strip())
        lines.append("")

    lines.append(f"💳 *PAYMENT:* {payment_label(draft.payment_method)}")
    lines.append("")

    subtotal, fee, total = order_totals(cart, draft, config)
    lines.append("💰 *AMOUNTS:*")
    lines.append(f"Subtotal: {format_currency(subtotal)}")
    if draft.delivery_mode is DeliveryModeV1.HOME_DELIVERY:
        lines.append(f"Delivery fee: {format_currency(fee)}")
    lines.append(f"*TOTAL: {format_currency(total)}*")
    lines.append("")

    lines.append(CLOSING_LINE)
    return "\n".join(lines)


def _item_lines(index: int, item: CartItem) -> list[str]:
    lines = [f"{index}. {item.name}", f"   • Size: {item.size}"]

    if len(item.flavors) == 1:
        lines.append(f"   • Flavor: {item.flavors[0]}")
    elif len(item.flavors) > 1:
        lines.append(f"   • Flavors: {', '.join(item.flavors)}")

    lines.append(f"   • Quantity: {item.quantity}")
    lines.append(f"   • Price: {format_currency(item.line_total)}")
    return lines


def _delivery_lines(draft: OrderDraft) -> list[str]:
    lines = [
        "👤 *CUSTOMER:*",
        f"Name: {draft.customer_name.strip()}",
        f"Phone: {draft.customer_phone}",
        "",
        "📍 *DELIVERY ADDRESS:*",
    ]

    address = draft.resolved_address
    # Unresolved drafts get the heading only, never a partial address.
    if address is not None:
        lines.append(f"{address.street}, {draft.house_number.strip()}")
        if draft.complement.strip():
            lines.append(draft.complement.strip())
        lines.append(f"{address.neighborhood} - {address.city}/{address.state}")
        lines.append(f"Postal code: {draft.raw_postal_code}")
        if draft.delivery_notes.strip():
            lines.append(f"Notes: {draft.delivery_notes.strip()}")

    return lines
