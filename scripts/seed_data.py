from __future__ import annotations

import argparse
from decimal import Decimal

from services.api.app.db.database import db_session
from services.api.app.db.init_db import init_db
from services.api.app.db.models import StoreSettings


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the pizzeria store configuration")
    parser.add_argument("--name", default="Pizzeria")
    parser.add_argument("--contact-id", default=None, help="Messaging number orders go to")
    parser.add_argument("--delivery-fee", type=Decimal, default=Decimal("5.00"))
    parser.add_argument("--minimum-order-value", type=Decimal, default=Decimal("20.00"))
    args = parser.parse_args()

    if args.delivery_fee < 0 or args.minimum_order_value < 0:
        parser.error("monetary values must be non-negative")

    init_db()

    db = db_session()
    try:
        row = db.get(StoreSettings, 1)
        if row is None:
            row = StoreSettings(id=1)
            db.add(row)

        row.name = args.name
        row.contact_id = args.contact_id
        row.delivery_fee = args.delivery_fee
        row.minimum_order_value = args.minimum_order_value

        db.commit()
        print(
            f"Seeded store={args.name!r} fee={args.delivery_fee} "
            f"minimum={args.minimum_order_value}"
        )
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
