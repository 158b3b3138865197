# paydesk/services/seed_service.py
from __future__ import annotations
import logging

log = logging.getLogger(__name__)

DEMO_PAYMENTS = [
    ("Jose Enrico Maxino", "task_001", "Task Queue System Test"),
    ("Christian Sumoba", "task_002", "Event Bus System Test"),
    ("James Martinez", "task_003", "Notification Service Test"),
    ("Gabriel Tiburcio", "task_004", "Document Processing Test"),
]
DEMO_AMOUNT = "75.00"


def seed_demo_data(storage) -> int:
    """One pending 48-hour test project payment per demo developer. Returns payments created."""
    created = 0
    for developer, task_id, title in DEMO_PAYMENTS:
        if storage.get_payments(developer_name=developer):
            continue
        storage.register_developer(developer)
        storage.create_payment(
            developer,
            DEMO_AMOUNT,
            payment_type="test_project",
            payment_method="manual",
            task_id=task_id,
            task_title=title,
            notes="48-hour test project",
        )
        created += 1
    log.info("Demo data seeded: %d payment(s)", created)
    return created
