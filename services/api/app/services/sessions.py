from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

import structlog
from packages.shared.schemas.checkout_v1 import DeliveryModeV1
from services.api.app.models.cart import CartState
from services.api.app.models.checkout import OrderDraft
from services.api.app.models.store import StoreConfig
from services.api.app.services.address_resolver import (
    LookupGeneration,
    LookupOutcome,
    LookupTicket,
)
from services.api.app.services.delivery_mode import switch_mode
from services.api.app.services.postal_base import PostalLookupError

logger = structlog.get_logger(__name__)

# Fields a customer edits directly; address resolution goes through edit_postal_code.
EDITABLE_FIELDS = frozenset(
    {
        "customer_name",
        "customer_phone",
        "house_number",
        "complement",
        "delivery_notes",
        "order_notes",
        "payment_method",
    }
)


@dataclass
class CheckoutSession:
    """Live state of one checkout.

    The draft is replaced wholesale on every edit, under a lock, so readers always see a
    consistent snapshot.
    """

    checkout_id: str
    cart: CartState
    config: StoreConfig
    draft: OrderDraft = field(default_factory=OrderDraft)
    postal_error: PostalLookupError | None = None
    lookups: LookupGeneration = field(default_factory=LookupGeneration)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def snapshot(self) -> tuple[OrderDraft, PostalLookupError | None]:
        with self._lock:
            return self.draft, self.postal_error

    def update_fields(self, changes: dict[str, Any]) -> OrderDraft:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be edited directly: {sorted(unknown)}")

        with self._lock:
            self.draft = self.draft.model_copy(update=changes)
            return self.draft

    def select_mode(self, mode: DeliveryModeV1) -> OrderDraft:
        with self._lock:
            self.draft = switch_mode(self.draft, mode)
            return self.draft

    def edit_postal_code(self, raw_input: str) -> LookupTicket:
        """Record a new postal code and take the ticket for its lookup.

        The previous address is dropped right away: it belonged to a code that is no
        longer in the field.
        """

        with self._lock:
            ticket = self.lookups.issue(raw_input)
            self.draft = self.draft.model_copy(
                update={"raw_postal_code": raw_input, "resolved_address": None}
            )
            self.postal_error = None
            return ticket

    def settle_lookup(self, ticket: LookupTicket, outcome: LookupOutcome) -> bool:
        """Apply a lookup outcome if ``ticket`` is still the newest one.

        Returns False, leaving the draft untouched, when a later edit superseded it.
        """

        with self._lock:
            if not self.lookups.is_current(ticket):
                logger.info(
                    "postal_lookup_stale",
                    checkout_id=self.checkout_id,
                    generation=ticket.generation,
                    current=self.lookups.current,
                )
                return False

            if isinstance(outcome, PostalLookupError):
                self.draft = self.draft.model_copy(update={"resolved_address": None})
                self.postal_error = outcome
            else:
                self.draft = self.draft.model_copy(update={"resolved_address": outcome})
                self.postal_error = None
            return True


class InMemoryCheckoutStore:
    def __init__(self) -> None:
        self._sessions: dict[str, CheckoutSession] = {}

    def save(self, session: CheckoutSession) -> None:
        self._sessions[session.checkout_id] = session

    def get(self, checkout_id: str) -> CheckoutSession | None:
        return self._sessions.get(checkout_id)

    def discard(self, checkout_id: str) -> None:
        self._sessions.pop(checkout_id, None)


store = InMemoryCheckoutStore()
