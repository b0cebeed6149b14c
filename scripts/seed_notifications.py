"""Utility script to seed the record store with sample admin data."""

from __future__ import annotations

import argparse

from storeadmin.application.use_cases.notifications import (
    create_order_notification,
    create_system_notification,
)
from storeadmin.domain.entities import OrderStatus
from storeadmin.infrastructure.database import SessionLocal, initialize_database
from storeadmin.infrastructure.record_store import RecordStore
from storeadmin.infrastructure.repositories import ORDERS_COLLECTION
from storeadmin.infrastructure.repositories.settings_repository import (
    SITE_SETTINGS_COLLECTION,
    STORE_SETTINGS_COLLECTION,
)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the seed run."""

    parser = argparse.ArgumentParser(
        description="Seed sample orders, settings and notifications.",
    )
    parser.add_argument(
        "--orders",
        type=int,
        default=3,
        help="Number of pending online orders to create (default: 3)",
    )
    parser.add_argument(
        "--site-name",
        default="Demo Store",
        help="Site name written to the site settings document",
    )
    return parser.parse_args()


def main() -> None:
    """Write the sample records using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        store = RecordStore(session)
        store.create({"id": "site", "siteName": args.site_name}, SITE_SETTINGS_COLLECTION)
        store.create({"id": "store", "currency": "EUR"}, STORE_SETTINGS_COLLECTION)

        for index in range(1, args.orders + 1):
            order_id = f"order-{index:04d}"
            store.create(
                {
                    "id": order_id,
                    "orderNumber": f"{1000 + index}",
                    "status": OrderStatus.PENDING.value,
                    "email": f"customer{index}@example.com",
                },
                ORDERS_COLLECTION,
            )
            result = create_order_notification(
                session,
                {
                    "id": order_id,
                    "order_number": f"{1000 + index}",
                    "customer_name": f"Customer {index}",
                    "email": f"customer{index}@example.com",
                    "total": 19.99 * index,
                },
            )
            if not result.success:
                raise SystemExit(f"Could not create order notification: {result.error}")

        result = create_system_notification(
            session,
            {
                "title": "Welcome",
                "message": "Sample data is ready.",
                "type": "info",
                "priority": "low",
            },
        )
        if not result.success:
            raise SystemExit(f"Could not create system notification: {result.error}")
    finally:
        session.close()

    print(f"Seeded {args.orders} orders and {args.orders + 1} notifications.")


if __name__ == "__main__":
    main()
