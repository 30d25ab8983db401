"""Shared checkout schema (v1).

These enums and small payloads are shared between the backend and the storefront
client. They should remain stable and backwards compatible once shipped.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DeliveryModeV1(str, Enum):
    COUNTER_PICKUP = "COUNTER_PICKUP"
    HOME_DELIVERY = "HOME_DELIVERY"


class PaymentMethodV1(str, Enum):
    PIX = "PIX"
    CASH = "CASH"
    DEBIT_CARD = "DEBIT_CARD"
    CREDIT_CARD = "CREDIT_CARD"


class LookupErrorKindV1(str, Enum):
    INVALID_FORMAT = "INVALID_FORMAT"
    NOT_FOUND = "NOT_FOUND"
    NETWORK_FAILURE = "NETWORK_FAILURE"


class FieldErrorV1(BaseModel):
    """An inline, user-correctable problem with one draft field."""

    field: str
    message: str


class PostalErrorV1(BaseModel):
    kind: LookupErrorKindV1
    message: str
