# paydesk/services/ledger_service.py
"""
Ledger aggregation - derived totals over the payment store.

Both views are recomputed in full from the records they are given:

1. Ledger row: one developer's payments (most recent first) are bucketed into
   confirmed and pending-like (pending + sent) and summed.
2. Payment stats: ledger rows are summed, confirmed payments dated inside the
   current calendar month are totalled, and the newest payments are sliced off
   for the dashboard.

Nothing here mutates state; the storage layer owns upserts and locking.
"""
from __future__ import annotations
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Sequence

from ..errors import InternalError
from ..models.ledger import LedgerRow, PaymentStats, ZERO
from ..models.payment import PaymentRecord

log = logging.getLogger(__name__)

RECENT_PAYMENTS_LIMIT = 10


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """First instant of ``now``'s calendar month and of the month after it."""
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def compute_ledger_totals(payments: Sequence[PaymentRecord]) -> dict:
    """
    Derive the payment fields of a LedgerRow.

    ``payments`` must already be ordered most-recent-first; the first confirmed
    entry supplies ``last_payment_date``.
    """
    try:
        confirmed = [p for p in payments if p.is_confirmed]
        pending = [p for p in payments if p.is_pending]
        return {
            "total_paid": sum((p.amount for p in confirmed), ZERO),
            "total_pending": sum((p.amount for p in pending), ZERO),
            "payment_count": len(confirmed),
            "last_payment_date": confirmed[0].payment_date if confirmed else None,
        }
    except (ArithmeticError, TypeError, ValueError, AttributeError) as e:
        log.exception("Ledger aggregation failed: %s", e)
        raise InternalError("Ledger aggregation failed") from e


def sum_this_month(payments: Iterable[PaymentRecord], now: datetime) -> Decimal:
    start, end = month_bounds(now)
    return sum(
        (
            p.amount
            for p in payments
            if p.is_confirmed and p.payment_date and start <= p.payment_date < end
        ),
        ZERO,
    )


def compute_payment_stats(
    ledgers: Sequence[LedgerRow],
    payments: Sequence[PaymentRecord],
    now: datetime,
    recent_limit: int = RECENT_PAYMENTS_LIMIT,
) -> PaymentStats:
    """Dashboard-wide statistics; ``payments`` ordered most-recent-first."""
    try:
        return PaymentStats(
            total_paid=sum((row.total_paid for row in ledgers), ZERO),
            total_pending=sum((row.total_pending for row in ledgers), ZERO),
            active_developers=sum(1 for row in ledgers if row.active),
            this_month=sum_this_month(payments, now),
            recent_payments=list(payments[:recent_limit]),
        )
    except (ArithmeticError, TypeError, ValueError, AttributeError) as e:
        log.exception("Payment stats aggregation failed: %s", e)
        raise InternalError("Payment stats aggregation failed") from e
