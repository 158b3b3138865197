# tests/test_ledger_service.py
from datetime import datetime
from decimal import Decimal

import pytest

from paydesk.errors import InternalError
from paydesk.models.ledger import LedgerRow
from paydesk.models.payment import PaymentRecord
from paydesk.services import ledger_service as ls


def _payment(pid, amount, status, created, payment_date=None, developer="Ada"):
    return PaymentRecord(
        id=pid,
        developer_name=developer,
        amount=Decimal(amount),
        payment_status=status,
        created_at=created,
        updated_at=created,
        payment_date=payment_date,
    )


@pytest.mark.parametrize("now,start,end", [
    (datetime(2026, 10, 19, 15, 4), datetime(2026, 10, 1), datetime(2026, 11, 1)),
    (datetime(2026, 12, 31, 23, 59), datetime(2026, 12, 1), datetime(2027, 1, 1)),
    (datetime(2027, 1, 1, 0, 0), datetime(2027, 1, 1), datetime(2027, 2, 1)),
])
def test_month_bounds(now, start, end):
    assert ls.month_bounds(now) == (start, end)


def test_compute_ledger_totals_buckets():
    day = datetime(2026, 10, 10)
    payments = [
        _payment("c2", "30.00", "confirmed", day, payment_date=datetime(2026, 10, 11)),
        _payment("s1", "5.50", "sent", day),
        _payment("c1", "20.00", "confirmed", day, payment_date=datetime(2026, 10, 12)),
        _payment("p1", "4.50", "pending", day),
    ]
    totals = ls.compute_ledger_totals(payments)
    assert totals == {
        "total_paid": Decimal("50.00"),
        "total_pending": Decimal("10.00"),
        "payment_count": 2,
        # first confirmed entry in list order, not the latest date
        "last_payment_date": datetime(2026, 10, 11),
    }


def test_compute_ledger_totals_empty():
    totals = ls.compute_ledger_totals([])
    assert totals["total_paid"] == 0
    assert totals["total_pending"] == 0
    assert totals["payment_count"] == 0
    assert totals["last_payment_date"] is None


def test_sum_this_month_window():
    now = datetime(2026, 10, 19, 12, 0)
    created = datetime(2026, 9, 1)
    payments = [
        _payment("in", "10", "confirmed", created, payment_date=datetime(2026, 10, 1, 0, 0)),
        _payment("prev", "20", "confirmed", created, payment_date=datetime(2026, 9, 30, 23, 59)),
        _payment("next", "40", "confirmed", created, payment_date=datetime(2026, 11, 1)),
        # reverted after confirmation: keeps its date but is not counted
        _payment("rev", "80", "pending", created, payment_date=datetime(2026, 10, 5)),
    ]
    assert ls.sum_this_month(payments, now) == Decimal("10")


def test_compute_payment_stats():
    now = datetime(2026, 10, 19)
    rows = [
        LedgerRow("Ada", total_paid=Decimal("50"), total_pending=Decimal("25")),
        LedgerRow("Bob", total_paid=Decimal("5"), total_pending=Decimal("0"), active=False),
    ]
    payments = [_payment(str(i), "1", "pending", now) for i in range(4)]
    stats = ls.compute_payment_stats(rows, payments, now, recent_limit=3)
    assert stats.total_paid == Decimal("55")
    assert stats.total_pending == Decimal("25")
    assert stats.active_developers == 1
    assert stats.this_month == 0
    assert [p.id for p in stats.recent_payments] == ["0", "1", "2"]


def test_aggregation_failure_is_internal_error():
    broken = LedgerRow("Ada", total_paid=None)
    with pytest.raises(InternalError):
        ls.compute_payment_stats([broken], [], datetime(2026, 10, 19))


def test_ledger_failure_is_internal_error():
    with pytest.raises(InternalError):
        ls.compute_ledger_totals([object()])
