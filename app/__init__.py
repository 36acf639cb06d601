"""Job board notification service."""
