# paydesk/models/payment.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from ..errors import ValidationError

PENDING = "pending"
SENT = "sent"
CONFIRMED = "confirmed"

PAYMENT_STATUSES = (PENDING, SENT, CONFIRMED)
# statuses summed into LedgerRow.total_pending
PENDING_LIKE = frozenset({PENDING, SENT})

PAYMENT_TYPES = ("test_project", "task", "bonus")
PAYMENT_METHODS = ("manual", "onlinejobs", "paypal", "wise")

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Coerce ``value`` to a 2-place Decimal; raises ValidationError if it isn't a number."""
    if isinstance(value, bool) or value is None:
        raise ValidationError("Amount must be a number", errors={"amount": ["Not a valid amount."]})
    try:
        amount = Decimal(str(value).replace(",", "").strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a number", errors={"amount": ["Not a valid amount."]})
    if not amount.is_finite():
        raise ValidationError("Amount must be a number", errors={"amount": ["Not a valid amount."]})
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def check_status(status) -> str:
    status = (status or "").strip().lower() if isinstance(status, str) else status
    if status not in PAYMENT_STATUSES:
        raise ValidationError(
            f"Invalid payment status: {status!r}",
            errors={"status": [f"Must be one of: {', '.join(PAYMENT_STATUSES)}."]},
        )
    return status


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class PaymentRecord:
    id: str
    developer_name: str
    amount: Decimal
    payment_status: str  # pending|sent|confirmed
    created_at: datetime
    updated_at: datetime
    payment_type: Optional[str] = None
    payment_method: Optional[str] = None
    # set on confirmation, kept if the status later moves back
    payment_date: Optional[datetime] = None
    task_id: Optional[str] = None
    task_title: Optional[str] = None
    project: Optional[str] = None
    component: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_confirmed(self) -> bool:
        return self.payment_status == CONFIRMED

    @property
    def is_pending(self) -> bool:
        return self.payment_status in PENDING_LIKE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "developerName": self.developer_name,
            "taskId": self.task_id,
            "taskTitle": self.task_title,
            "project": self.project,
            "component": self.component,
            "amount": float(self.amount),
            "paymentType": self.payment_type,
            "paymentMethod": self.payment_method,
            "paymentStatus": self.payment_status,
            "paymentDate": _iso(self.payment_date),
            "notes": self.notes,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }

    def to_summary(self) -> dict:
        """Short shape used by the dashboard's recent-payments list."""
        return {
            "id": self.id,
            "developerName": self.developer_name,
            "amount": float(self.amount),
            "paymentStatus": self.payment_status,
            "paymentDate": _iso(self.payment_date),
            "taskTitle": self.task_title,
        }
