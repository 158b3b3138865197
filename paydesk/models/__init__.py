from .payment import (
    PaymentRecord,
    PAYMENT_STATUSES,
    PENDING,
    SENT,
    CONFIRMED,
)
from .ledger import LedgerRow, PaymentStats
