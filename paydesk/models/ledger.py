# paydesk/models/ledger.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .payment import PaymentRecord

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class LedgerRow:
    """Per-developer summary derived from the payment store. Never authoritative."""

    developer_name: str
    total_paid: Decimal = ZERO
    total_pending: Decimal = ZERO
    payment_count: int = 0
    last_payment_date: Optional[datetime] = None
    joined_date: Optional[datetime] = None
    active: bool = True

    def totals(self) -> tuple:
        return (self.total_paid, self.total_pending, self.payment_count, self.last_payment_date)

    def to_dict(self) -> dict:
        return {
            "developerName": self.developer_name,
            "totalPaid": float(self.total_paid),
            "totalPending": float(self.total_pending),
            "paymentCount": self.payment_count,
            "lastPaymentDate": self.last_payment_date.isoformat() if self.last_payment_date else None,
            "joinedDate": self.joined_date.isoformat() if self.joined_date else None,
            "active": self.active,
        }


@dataclass(frozen=True)
class PaymentStats:
    total_paid: Decimal = ZERO
    total_pending: Decimal = ZERO
    active_developers: int = 0
    this_month: Decimal = ZERO
    recent_payments: list[PaymentRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalPaid": float(self.total_paid),
            "totalPending": float(self.total_pending),
            "activeDevelopers": self.active_developers,
            "thisMonth": float(self.this_month),
            "recentPayments": [p.to_summary() for p in self.recent_payments],
        }
