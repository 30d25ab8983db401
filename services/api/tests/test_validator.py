from __future__ import annotations

from decimal import Decimal

import pytest
from packages.shared.schemas.checkout_v1 import DeliveryModeV1
from services.api.app.models.cart import CartItem, CartState
from services.api.app.models.checkout import AddressRecord, OrderDraft
from services.api.app.models.store import StoreConfig
from services.api.app.services.validator import (
    can_dispatch,
    field_errors,
    is_economically_valid,
    is_structurally_valid,
    minimum_shortfall,
    order_totals,
)

PAULISTA = AddressRecord(
    street="Avenida Paulista", neighborhood="Bela Vista", city="São Paulo", state="SP"
)


def _cart(*prices: str) -> CartState:
    return CartState(
        items=[
            CartItem(name=f"Pizza {i}", size="Large", quantity=1, unit_price=Decimal(p))
            for i, p in enumerate(prices)
        ]
    )


def _config(minimum: str = "20.00", fee: str = "5.00") -> StoreConfig:
    return StoreConfig(
        name="Pizzeria",
        contact_id="5511912345678",
        delivery_fee=Decimal(fee),
        minimum_order_value=Decimal(minimum),
    )


def _complete_delivery_draft() -> OrderDraft:
    return OrderDraft(
        delivery_mode=DeliveryModeV1.HOME_DELIVERY,
        customer_name="Ana Souza",
        customer_phone="(11) 98765-4321",
        raw_postal_code="01310-100",
        resolved_address=PAULISTA,
        house_number="100",
    )


@pytest.mark.parametrize(
    "draft",
    [
        OrderDraft(),
        OrderDraft(customer_name="   ", customer_phone="1"),
        OrderDraft(raw_postal_code="123", house_number=""),
        _complete_delivery_draft().model_copy(
            update={"delivery_mode": DeliveryModeV1.COUNTER_PICKUP, "customer_name": ""}
        ),
    ],
)
def test_counter_pickup_is_always_structurally_valid(draft: OrderDraft) -> None:
    assert is_structurally_valid(draft)
    assert field_errors(draft) == []


def test_complete_home_delivery_draft_is_valid() -> None:
    draft = _complete_delivery_draft()
    assert is_structurally_valid(draft)
    assert field_errors(draft) == []


def test_complement_and_delivery_notes_are_optional() -> None:
    draft = _complete_delivery_draft().model_copy(update={"complement": "", "delivery_notes": ""})
    assert is_structurally_valid(draft)


@pytest.mark.parametrize(
    ("update", "field"),
    [
        ({"customer_name": ""}, "customer_name"),
        ({"customer_name": "   "}, "customer_name"),
        ({"customer_phone": ""}, "customer_phone"),
        ({"customer_phone": "(11) 9876-543"}, "customer_phone"),
        ({"resolved_address": None}, "resolved_address"),
        ({"house_number": ""}, "house_number"),
        ({"house_number": "  "}, "house_number"),
    ],
)
def test_home_delivery_missing_one_required_field_is_invalid(update: dict, field: str) -> None:
    draft = _complete_delivery_draft().model_copy(update=update)

    assert not is_structurally_valid(draft)
    assert [e.field for e in field_errors(draft)] == [field]


def test_phone_with_ten_digits_is_enough() -> None:
    draft = _complete_delivery_draft().model_copy(update={"customer_phone": "(11) 3333-4444"})
    assert is_structurally_valid(draft)


def test_short_postal_code_is_reported_instead_of_missing_address() -> None:
    draft = _complete_delivery_draft().model_copy(
        update={"raw_postal_code": "01310", "resolved_address": None}
    )

    assert [e.field for e in field_errors(draft)] == ["raw_postal_code"]


def test_economic_gate_boundary() -> None:
    config = _config(minimum="20.00")

    assert is_economically_valid(_cart("20.00"), config)
    assert not is_economically_valid(_cart("19.99"), config)
    assert is_economically_valid(_cart("10.00", "10.00"), config)


def test_delivery_fee_never_counts_toward_minimum() -> None:
    config = _config(minimum="20.00", fee="5.00")
    cart = _cart("16.00")
    draft = _complete_delivery_draft()

    _, _, total = order_totals(cart, draft, config)
    assert total == Decimal("21.00")
    assert not is_economically_valid(cart, config)
    assert not can_dispatch(cart, draft, config)


def test_gates_are_independent() -> None:
    config = _config(minimum="20.00")
    incomplete = _complete_delivery_draft().model_copy(update={"customer_name": ""})

    # Scenario B: subtotal above minimum, delivery details incomplete.
    assert is_economically_valid(_cart("40.00"), config)
    assert not can_dispatch(_cart("40.00"), incomplete, config)

    assert not can_dispatch(_cart("5.00"), OrderDraft(), config)
    assert can_dispatch(_cart("40.00"), OrderDraft(), config)


@pytest.mark.parametrize(
    ("mode", "expected_fee", "expected_total"),
    [
        (DeliveryModeV1.COUNTER_PICKUP, Decimal("0.00"), Decimal("40.00")),
        (DeliveryModeV1.HOME_DELIVERY, Decimal("7.50"), Decimal("47.50")),
    ],
)
def test_order_totals_add_fee_only_for_home_delivery(
    mode: DeliveryModeV1, expected_fee: Decimal, expected_total: Decimal
) -> None:
    subtotal, fee, total = order_totals(
        _cart("25.00", "15.00"), OrderDraft(delivery_mode=mode), _config(fee="7.50")
    )

    assert subtotal == Decimal("40.00")
    assert fee == expected_fee
    assert total == expected_total


def test_minimum_shortfall() -> None:
    config = _config(minimum="20.00")

    assert minimum_shortfall(_cart("12.50"), config) == Decimal("7.50")
    assert minimum_shortfall(_cart("20.00"), config) == Decimal("0.00")
    assert minimum_shortfall(_cart("35.00"), config) == Decimal("0.00")
