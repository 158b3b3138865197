# paydesk/blueprints/api/ledger.py
from flask import current_app

from ...errors import NotFoundError
from ...services.storage_service import get_storage
from .utils import ok, ledger_payload
from . import api_bp


def _recent_limit() -> int:
    return current_app.config.get("LEDGER_RECENT_PAYMENTS", 3)


@api_bp.get("/payments/ledger")
def ledger_list():
    storage = get_storage()
    rows = [ledger_payload(storage, row, _recent_limit()) for row in storage.get_developer_ledgers()]
    return ok(rows)


@api_bp.get("/payments/ledger/<path:developer_name>")
def ledger_detail(developer_name):
    storage = get_storage()
    row = storage.get_developer_ledger(developer_name)
    if row is None:
        raise NotFoundError(f"No ledger for developer {developer_name}")
    return ok(ledger_payload(storage, row, _recent_limit()))


@api_bp.get("/payments/stats")
def payment_stats():
    return ok(get_storage().get_payment_stats().to_dict())
