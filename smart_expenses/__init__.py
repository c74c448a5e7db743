"""Expense ledger core: records, the persisted ledger and its derived views."""

from .exceptions import (
    InvalidAmount,
    InvalidDate,
    PersistenceError,
    RecordNotFoundError,
    StoreReadFailure,
    UnknownCategory,
    ValidationError,
)
from .ledger import STORE_KEY, Ledger
from .models import ALL_CATEGORIES, Category, Record
from .storage import FileBlobStore, MemoryBlobStore
from .views import filter_by, total_amount, totals_by_category, unknown_category_records

__all__ = [
    "ALL_CATEGORIES",
    "Category",
    "Record",
    "Ledger",
    "STORE_KEY",
    "FileBlobStore",
    "MemoryBlobStore",
    "filter_by",
    "total_amount",
    "totals_by_category",
    "unknown_category_records",
    "InvalidAmount",
    "InvalidDate",
    "PersistenceError",
    "RecordNotFoundError",
    "StoreReadFailure",
    "UnknownCategory",
    "ValidationError",
]
