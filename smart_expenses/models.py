"""Data models for the expense ledger domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Union

__all__ = ["ALL_CATEGORIES", "Category", "Record", "DATE_FORMAT", "format_date"]

DATE_FORMAT = "%Y-%m-%d"

# Filter value meaning "no category constraint".
ALL_CATEGORIES = "All"


class Category(str, Enum):
    """Closed set of expense categories, in display order."""

    FOOD = "Food"
    TRAVEL = "Travel"
    BILLS = "Bills"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    OTHERS = "Others"

    @classmethod
    def labels(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def lookup(cls, label: object) -> Optional["Category"]:
        """Return the member whose label matches exactly, or None."""
        try:
            return cls(label)
        except (TypeError, ValueError):
            return None


def format_date(value: date) -> str:
    return value.isoformat()


@dataclass(frozen=True)
class Record:
    """One expense entry.

    ``category`` is a :class:`Category` member for every record created through
    the ledger. Records hydrated from externally edited storage may carry a
    raw label outside the known set; those keep the plain string.
    """

    id: str
    amount: Decimal
    category: Union[Category, str]
    date: date
    note: str = ""

    @property
    def category_label(self) -> str:
        if isinstance(self.category, Category):
            return self.category.value
        return self.category

    @property
    def has_known_category(self) -> bool:
        return isinstance(self.category, Category)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the record to JSON-friendly natives."""
        return {
            "id": self.id,
            # Amounts are capped well inside float's exact decimal range.
            "amount": float(self.amount),
            "category": self.category_label,
            "date": format_date(self.date),
            "note": self.note,
        }
