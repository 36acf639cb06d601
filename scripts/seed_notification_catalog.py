"""Register the default notification types and their system templates."""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import (
    DEFAULT_NOTIFICATION_CATALOG,
    seed_notification_catalog,
)
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Seed the notification type catalog with the built-in types.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every type that gets registered.",
    )
    return parser.parse_args()


def main() -> None:
    """Create any missing default notification types."""

    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    initialize_database()

    session = SessionLocal()
    try:
        created = seed_notification_catalog(session)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not seed the notification catalog: {exc}") from exc
    finally:
        session.close()

    print(
        f"Notification catalog ready: {len(created)} new type(s), "
        f"{len(DEFAULT_NOTIFICATION_CATALOG)} known."
    )


if __name__ == "__main__":
    main()
