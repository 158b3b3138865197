# paydesk/services/storage_service.py
from __future__ import annotations
import itertools
import logging
import threading
import uuid
from dataclasses import fields, replace
from datetime import datetime
from typing import Callable, Iterable, Optional

from flask import current_app

from ..errors import NotFoundError, ValidationError
from ..models.ledger import LedgerRow
from ..models.payment import (
    CONFIRMED,
    PENDING,
    PaymentRecord,
    check_status,
    to_money,
)
from .ledger_service import (
    RECENT_PAYMENTS_LIMIT,
    compute_ledger_totals,
    compute_payment_stats,
)

log = logging.getLogger(__name__)

_LEDGER_FIELDS = {f.name for f in fields(LedgerRow)} - {"developer_name"}


def _clean(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _local_naive(value: Optional[datetime]) -> Optional[datetime]:
    # everything in the store is naive local time
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class MemStorage:
    """
    In-process payment store with a derived per-developer ledger.

    One instance per app (see ``init_storage``); tests build their own. All
    reads and writes hold a single re-entrant lock.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None,
                 recent_limit: int = RECENT_PAYMENTS_LIMIT):
        self._payments: dict[str, PaymentRecord] = {}
        self._inserted: dict[str, int] = {}
        self._ledgers: dict[str, LedgerRow] = {}
        self._seq = itertools.count()
        self._lock = threading.RLock()
        self._clock = clock or datetime.now
        self.recent_limit = recent_limit

    def now(self) -> datetime:
        return self._clock()

    # -----------------
    # Payments
    # -----------------

    def get_payments(self, developer_name: Optional[str] = None, status: Optional[str] = None,
                     project: Optional[str] = None, component: Optional[str] = None,
                     from_date: Optional[datetime] = None,
                     to_date: Optional[datetime] = None) -> list[PaymentRecord]:
        """Filtered payments, newest ``created_at`` first (later insert wins a tie)."""
        from_date, to_date = _local_naive(from_date), _local_naive(to_date)
        with self._lock:
            rows: Iterable[PaymentRecord] = self._payments.values()
            if developer_name:
                rows = [p for p in rows if p.developer_name == developer_name]
            if status:
                rows = [p for p in rows if p.payment_status == status]
            if project:
                rows = [p for p in rows if p.project == project]
            if component:
                rows = [p for p in rows if p.component == component]
            if from_date:
                rows = [p for p in rows if p.created_at >= from_date]
            if to_date:
                rows = [p for p in rows if p.created_at <= to_date]
            return sorted(
                rows,
                key=lambda p: (p.created_at, self._inserted[p.id]),
                reverse=True,
            )

    def get_payment(self, payment_id: str) -> Optional[PaymentRecord]:
        with self._lock:
            return self._payments.get(payment_id)

    def create_payment(self, developer_name: str, amount, *, payment_type: Optional[str] = None,
                       payment_method: Optional[str] = None, payment_status: Optional[str] = None,
                       payment_date: Optional[datetime] = None, task_id: Optional[str] = None,
                       task_title: Optional[str] = None, project: Optional[str] = None,
                       component: Optional[str] = None, notes: Optional[str] = None) -> PaymentRecord:
        developer_name = _clean(developer_name)
        if not developer_name:
            raise ValidationError(
                "Developer name is required",
                errors={"developerName": ["This field is required."]},
            )
        amount = to_money(amount)
        if amount <= 0:
            raise ValidationError(
                "Amount must be greater than zero",
                errors={"amount": ["Must be greater than zero."]},
            )
        status = check_status(payment_status) if payment_status else PENDING

        with self._lock:
            now = self.now()
            payment = PaymentRecord(
                id=str(uuid.uuid4()),
                developer_name=developer_name,
                amount=amount,
                payment_status=status,
                created_at=now,
                updated_at=now,
                payment_type=_clean(payment_type) or "test_project",
                payment_method=_clean(payment_method) or "manual",
                payment_date=(_local_naive(payment_date) or now) if status == CONFIRMED else None,
                task_id=_clean(task_id),
                task_title=_clean(task_title),
                project=_clean(project),
                component=_clean(component),
                notes=_clean(notes),
            )
            self._payments[payment.id] = payment
            self._inserted[payment.id] = next(self._seq)
            self.recompute_ledger(developer_name)

        log.info("Payment %s created: developer=%s amount=%s status=%s",
                 payment.id, developer_name, amount, status)
        return payment

    def _set_status(self, payment_id: str, status: str) -> PaymentRecord:
        payment = self._payments.get(payment_id)
        if payment is None:
            raise NotFoundError(f"Payment {payment_id} not found")
        now = self.now()
        updated = replace(
            payment,
            payment_status=status,
            payment_date=now if status == CONFIRMED else payment.payment_date,
            updated_at=now,
        )
        self._payments[payment_id] = updated
        return updated

    def update_payment_status(self, payment_id: str, status: str) -> PaymentRecord:
        status = check_status(status)
        with self._lock:
            payment = self._set_status(payment_id, status)
            self.recompute_ledger(payment.developer_name)
        log.info("Payment %s -> %s", payment_id, status)
        return payment

    def bulk_update_payment_status(self, payment_ids: Iterable[str], status: str) -> list[PaymentRecord]:
        """Update each known id; unknown ids are skipped. One recompute per developer."""
        status = check_status(status)
        updated: list[PaymentRecord] = []
        skipped = 0
        with self._lock:
            developers: dict[str, None] = {}
            for pid in payment_ids:
                try:
                    payment = self._set_status(pid, status)
                except NotFoundError:
                    skipped += 1
                    continue
                updated.append(payment)
                developers.setdefault(payment.developer_name)
            for name in developers:
                self.recompute_ledger(name)

        log.info("Bulk status -> %s: %d updated, %d skipped", status, len(updated), skipped)
        return updated

    # -----------------
    # Ledger
    # -----------------

    def recompute_ledger(self, developer_name: str) -> LedgerRow:
        """Rebuild one developer's totals from the store; keeps ``active`` and ``joined_date``."""
        with self._lock:
            totals = compute_ledger_totals(self.get_payments(developer_name=developer_name))
            return self.update_developer_ledger(developer_name, **totals)

    def get_developer_ledgers(self) -> list[LedgerRow]:
        with self._lock:
            return sorted(self._ledgers.values(), key=lambda row: row.developer_name.lower())

    def get_developer_ledger(self, developer_name: str) -> Optional[LedgerRow]:
        with self._lock:
            return self._ledgers.get(developer_name)

    def update_developer_ledger(self, developer_name: str, **changes) -> LedgerRow:
        unknown = set(changes) - _LEDGER_FIELDS
        if unknown:
            raise ValidationError(f"Unknown ledger field(s): {', '.join(sorted(unknown))}")
        with self._lock:
            row = self._ledgers.get(developer_name)
            if row is None:
                row = LedgerRow(developer_name=developer_name, joined_date=self.now())
            row = replace(row, **changes)
            self._ledgers[developer_name] = row
            return row

    def register_developer(self, developer_name: str, active: bool = True) -> LedgerRow:
        """Seed a zero ledger row; an existing row only gets its ``active`` flag set."""
        name = _clean(developer_name)
        if not name:
            raise ValidationError(
                "Developer name is required",
                errors={"name": ["This field is required."]},
            )
        return self.update_developer_ledger(name, active=bool(active))

    def set_developer_active(self, developer_name: str, active: bool) -> LedgerRow:
        with self._lock:
            if developer_name not in self._ledgers:
                raise NotFoundError(f"Developer {developer_name} not found")
            return self.update_developer_ledger(developer_name, active=bool(active))

    # -----------------
    # Stats
    # -----------------

    def get_payment_stats(self):
        with self._lock:
            return compute_payment_stats(
                self.get_developer_ledgers(),
                self.get_payments(),
                self.now(),
                recent_limit=self.recent_limit,
            )


def init_storage(app, storage: Optional[MemStorage] = None) -> MemStorage:
    """Attach a store to ``app.extensions['storage']``; a fresh one unless injected."""
    if storage is None:
        storage = MemStorage(recent_limit=app.config.get("RECENT_PAYMENTS_LIMIT", RECENT_PAYMENTS_LIMIT))
    app.extensions["storage"] = storage
    return storage


def get_storage() -> MemStorage:
    return current_app.extensions["storage"]
