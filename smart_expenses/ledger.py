"""The expense ledger: owner of the record sequence and its persistence."""

from __future__ import annotations

import threading
from datetime import date
from typing import Callable, List, Optional, Protocol, Tuple
from uuid import uuid4

from .codec import deserialize, serialize
from .exceptions import PersistenceError, RecordNotFoundError, StoreReadFailure
from .logging_utils import get_logger
from .models import Record
from .validators import parse_amount, validate_category, validate_date, validate_note

LOGGER = get_logger(__name__)

STORE_KEY = "smart_expenses_v1"
MAX_ID_ATTEMPTS = 16


class BlobStore(Protocol):
    """Key-value contract the ledger persists through."""

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, blob: str) -> None:
        ...


def _new_record_id() -> str:
    return str(uuid4())


class Ledger:
    """Manages expense records newest-first and writes every change through to the store."""

    def __init__(
        self,
        store: BlobStore,
        key: str = STORE_KEY,
        *,
        id_factory: Callable[[], str] = _new_record_id,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._key = key
        self._id_factory = id_factory
        self._today = today
        self._lock = threading.RLock()
        self._records: Tuple[Record, ...] = ()
        self.load()  # Hydrate in-memory sequence from persistence on construction.

    # Public API -----------------------------------------------------------
    def add(
        self,
        amount: object,
        category: object,
        date: object = None,
        note: object = "",
    ) -> Record:
        """Validate the inputs, prepend a new record and persist the snapshot."""
        amount_value = parse_amount(amount)
        category_value = validate_category(category)
        date_value = validate_date(date, default=self._today())
        note_value = validate_note(note)

        with self._lock:
            record = Record(
                id=self._fresh_id(),
                amount=amount_value,
                category=category_value,
                date=date_value,
                note=note_value,
            )
            self._commit((record,) + self._records)
        LOGGER.debug("Added expense %s (%s %s)", record.id, record.category_label, record.amount)
        return record

    def remove(self, record_id: str) -> Record:
        """Remove and return the record with ``record_id``."""
        with self._lock:
            removed = self._get_or_raise(record_id)
            self._commit(tuple(record for record in self._records if record.id != record_id))
        LOGGER.debug("Removed expense %s", record_id)
        return removed

    def get(self, record_id: str) -> Record:
        """Return a record or raise if it does not exist."""
        return self._get_or_raise(record_id)

    def snapshot(self) -> Tuple[Record, ...]:
        """Immutable newest-first view of the current records."""
        return self._records

    def load(self) -> None:
        """Replace the in-memory sequence with the persisted snapshot."""
        records = self.load_from_store()
        with self._lock:
            self._records = tuple(records)
        LOGGER.debug("Loaded %d expenses from %s", len(records), self._key)

    def load_from_store(self) -> List[Record]:
        """Decode the persisted snapshot; a missing or unusable blob yields an empty list."""
        try:
            blob = self._store.read(self._key)
            if blob is None:
                return []
            return deserialize(blob)
        except StoreReadFailure as exc:
            LOGGER.warning("Ignoring unreadable snapshot %s: %s", self._key, exc)
            return []

    def __len__(self) -> int:
        return len(self._records)

    # Internal helpers -----------------------------------------------------
    def _commit(self, records: Tuple[Record, ...]) -> None:
        # The new sequence only becomes visible once the write has landed.
        self._persist(records)
        self._records = records

    def _persist(self, records: Tuple[Record, ...]) -> None:
        try:
            self._store.write(self._key, serialize(records))
        except PersistenceError:
            raise
        except Exception as exc:  # pragma: no cover - defensive guard
            raise PersistenceError("Unexpected error while saving expenses") from exc

    def _fresh_id(self) -> str:
        existing = {record.id for record in self._records}
        for _ in range(MAX_ID_ATTEMPTS):
            record_id = self._id_factory()
            if record_id not in existing:
                return record_id
        raise RuntimeError(f"id_factory produced no unused id in {MAX_ID_ATTEMPTS} attempts")

    def _get_or_raise(self, record_id: str) -> Record:
        for record in self._records:
            if record.id == record_id:
                return record
        raise RecordNotFoundError(f"Expense {record_id} not found")
