from __future__ import annotations

import re
from decimal import Decimal

from services.api.app.models.cart import to_money

CURRENCY_SYMBOL = "R$"

_NON_DIGITS = re.compile(r"\D")


def digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def format_currency(amount: Decimal) -> str:
    """Render money the one way checkout shows it, e.g. ``R$ 40.00``."""

    return f"{CURRENCY_SYMBOL} {to_money(amount):.2f}"


def mask_postal_code(value: str) -> str:
    # 01310100 -> 01310-100; partial input keeps whatever digits were typed. Overlong
    # input is not truncated so it still fails the 8 digit check.
    digits = digits_only(value)
    if 5 < len(digits) <= 8:
        return f"{digits[:5]}-{digits[5:]}"
    return digits


def mask_phone(value: str) -> str:
    # 11999999999 -> (11) 99999-9999; 1133334444 -> (11) 3333-4444.
    digits = digits_only(value)[:11]
    if len(digits) <= 2:
        return digits

    area, rest = digits[:2], digits[2:]
    if len(rest) > 8:
        return f"({area}) {rest[:5]}-{rest[5:]}"
    if len(rest) > 4:
        return f"({area}) {rest[:4]}-{rest[4:]}"
    return f"({area}) {rest}"
