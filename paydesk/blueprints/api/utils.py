# paydesk/blueprints/api/utils.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from flask import jsonify, request

from ...errors import ValidationError


def ok(data, status: int = 200, **extra):
    return jsonify({"success": True, "data": data, **extra}), status


def parse_datetime(raw: Optional[str], field: str) -> Optional[datetime]:
    """ISO-8601 date or datetime (a trailing ``Z`` is accepted); blank -> None."""
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(
            f"Invalid date for {field}. Use YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS.",
            errors={field: ["Not a valid ISO-8601 date."]},
        )


def validated(form_cls):
    """Bind ``form_cls`` to the current request body and validate it or raise ValidationError."""
    if request.is_json and not isinstance(request.get_json(silent=True), dict):
        raise ValidationError("Request body must be a JSON object")
    form = form_cls()
    if not form.validate():
        raise ValidationError("Invalid input", errors=form.error_map())
    return form


def ledger_payload(storage, row, recent: int) -> dict:
    """Ledger row plus that developer's newest payments."""
    payload = row.to_dict()
    payments = storage.get_payments(developer_name=row.developer_name)[:recent]
    payload["recentPayments"] = [p.to_dict() for p in payments]
    return payload
