from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from packages.shared.schemas.checkout_v1 import DeliveryModeV1, PaymentMethodV1
from pydantic import ValidationError
from services.api.app.db.database import db_session
from services.api.app.models.cart import CartState
from services.api.app.models.checkout import OrderDraft
from services.api.app.services.address_resolver import resolve
from services.api.app.services.channel_base import BrowserChannelOpener
from services.api.app.services.composer import compose
from services.api.app.services.dispatcher import build_dispatch_url, dispatch
from services.api.app.services.formatting import mask_phone, mask_postal_code
from services.api.app.services.postal_base import PostalLookupError
from services.api.app.services.postal_factory import get_postal_directory
from services.api.app.services.store_config import load_store_config
from services.api.app.services.validator import can_dispatch, field_errors, minimum_shortfall


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Compose a pizzeria order from a cart JSON file and send it to the store"
    )
    parser.add_argument("--cart", required=True, help='JSON file: {"items": [...]}')
    parser.add_argument(
        "--payment",
        choices=[m.value.lower() for m in PaymentMethodV1],
        default="pix",
    )
    parser.add_argument("--notes", default="", help="Order notes")
    parser.add_argument("--delivery", action="store_true", help="Home delivery instead of pickup")
    parser.add_argument("--name", default="")
    parser.add_argument("--phone", default="")
    parser.add_argument("--postal-code", default="")
    parser.add_argument("--number", default="", help="House number")
    parser.add_argument("--complement", default="")
    parser.add_argument("--delivery-notes", default="")
    parser.add_argument(
        "--open",
        action="store_true",
        help="Open the messaging link in the browser (default: print only)",
    )
    args = parser.parse_args()

    try:
        cart = CartState.model_validate(json.loads(Path(args.cart).read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as e:
        print(f"Invalid cart file: {e}", file=sys.stderr)
        return 1

    draft = OrderDraft(
        delivery_mode=(
            DeliveryModeV1.HOME_DELIVERY if args.delivery else DeliveryModeV1.COUNTER_PICKUP
        ),
        customer_name=args.name,
        customer_phone=mask_phone(args.phone),
        raw_postal_code=mask_postal_code(args.postal_code),
        house_number=args.number,
        complement=args.complement,
        delivery_notes=args.delivery_notes,
        order_notes=args.notes,
        payment_method=PaymentMethodV1(args.payment.upper()),
    )

    if args.delivery:
        try:
            address = resolve(draft.raw_postal_code, get_postal_directory())
        except PostalLookupError as e:
            print(f"Postal code: {e}", file=sys.stderr)
        else:
            draft = draft.model_copy(update={"resolved_address": address})

    db = db_session()
    try:
        config = load_store_config(db)
    finally:
        db.close()

    if not can_dispatch(cart, draft, config):
        for err in field_errors(draft):
            print(f"{err.field}: {err.message}", file=sys.stderr)
        shortfall = minimum_shortfall(cart, config)
        if shortfall > 0:
            print(f"Missing {shortfall} to reach the minimum order value", file=sys.stderr)
        return 2

    text = compose(cart, draft, config)
    print(text)
    print()

    if args.open:
        print(dispatch(text, config, BrowserChannelOpener()))
    else:
        print(build_dispatch_url(text, config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
