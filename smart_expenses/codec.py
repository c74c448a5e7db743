"""JSON codec for the persisted ledger snapshot.

The snapshot is a single JSON array, newest record first::

    [{"id": "...", "amount": 50.0, "category": "Food", "date": "2024-01-01", "note": "lunch"}]

Decoding is lenient per entry and strict for the container: an entry that
cannot be hydrated is skipped with a warning, while a blob that is not a JSON
array raises :class:`StoreReadFailure`.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Set

from .exceptions import StoreReadFailure, ValidationError
from .logging_utils import get_logger
from .models import Category, Record
from .validators import parse_amount, validate_date, validate_note, validate_record_id

LOGGER = get_logger(__name__)


def serialize(records: Iterable[Record]) -> str:
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def record_from_dict(data: Dict[str, Any]) -> Record:
    """Hydrate a Record from JSON-native data, keeping out-of-set category labels."""
    if "id" not in data:
        raise ValidationError("id is missing")
    raw_category = data.get("category")
    category = Category.lookup(raw_category)
    if category is None:
        if not isinstance(raw_category, str):
            raise ValidationError("category must be a string")
        category = raw_category
    return Record(
        id=validate_record_id(data["id"]),
        amount=parse_amount(data.get("amount")),
        category=category,
        date=validate_date(data.get("date")),
        note=validate_note(data.get("note")),
    )


def deserialize(blob: str) -> List[Record]:
    try:
        payload = json.loads(blob)
    except (ValueError, TypeError, RecursionError) as exc:
        raise StoreReadFailure("Snapshot is not valid JSON") from exc
    if not isinstance(payload, list):
        raise StoreReadFailure("Expected a JSON array snapshot")

    records: List[Record] = []
    seen: Set[str] = set()
    for position, entry in enumerate(payload):
        if not isinstance(entry, dict):
            LOGGER.warning("Skipping snapshot entry %d: not an object", position)
            continue
        try:
            record = record_from_dict(entry)
        except ValidationError as exc:
            LOGGER.warning("Skipping snapshot entry %d: %s", position, exc)
            continue
        if record.id in seen:
            LOGGER.warning("Skipping snapshot entry %d: duplicate id %s", position, record.id)
            continue
        if not record.has_known_category:
            LOGGER.warning(
                "Snapshot entry %s has unknown category %r; it is excluded from category totals",
                record.id,
                record.category,
            )
        seen.add(record.id)
        records.append(record)
    return records
