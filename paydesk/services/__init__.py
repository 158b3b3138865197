from .storage_service import MemStorage, init_storage, get_storage
from .ledger_service import compute_ledger_totals, compute_payment_stats
from .seed_service import seed_demo_data

__all__ = [
    "MemStorage",
    "init_storage",
    "get_storage",
    "compute_ledger_totals",
    "compute_payment_stats",
    "seed_demo_data",
]
