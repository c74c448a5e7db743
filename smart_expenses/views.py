"""Pure derivations over a ledger snapshot."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .models import ALL_CATEGORIES, Category, Record

ZERO = Decimal("0.00")


def filter_by(
    records: Iterable[Record],
    category_filter: Optional[str] = ALL_CATEGORIES,
    search_text: Optional[str] = "",
) -> List[Record]:
    """Records matching the category filter and whose note contains ``search_text``.

    ``"All"`` (or ``None``) disables the category constraint and an empty
    search matches every note, including empty ones. Input order is kept.
    """
    category = None if category_filter in (None, ALL_CATEGORIES) else category_filter
    needle = (search_text or "").lower()

    def matches(record: Record) -> bool:
        if category is not None and record.category != category:
            return False
        if needle and needle not in record.note.lower():
            return False
        return True

    return [record for record in records if matches(record)]


def totals_by_category(records: Iterable[Record]) -> Dict[Category, Decimal]:
    """Sum of amounts per known category, every category present.

    Records with a label outside the known set are left out; see
    :func:`unknown_category_records`.
    """
    totals: Dict[Category, Decimal] = {category: ZERO for category in Category}
    for record in records:
        if record.has_known_category:
            totals[record.category] += record.amount
    return totals


def unknown_category_records(records: Iterable[Record]) -> List[Record]:
    return [record for record in records if not record.has_known_category]


def total_amount(records: Iterable[Record]) -> Decimal:
    return sum((record.amount for record in records), start=ZERO)
