"""Tests for the filter and aggregation views."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from smart_expenses.ledger import Ledger
from smart_expenses.models import ALL_CATEGORIES, Category, Record
from smart_expenses.views import (
    filter_by,
    total_amount,
    totals_by_category,
    unknown_category_records,
)


@pytest.fixture
def lunch_and_bus(ledger: Ledger):
    lunch = ledger.add(50, "Food", "2024-01-01", "lunch")
    bus = ledger.add(30, "Travel", "2024-01-02", "bus")
    return lunch, bus


def test_totals_cover_every_category(ledger: Ledger, lunch_and_bus) -> None:
    totals = totals_by_category(ledger.snapshot())

    assert totals == {
        Category.FOOD: Decimal("50"),
        Category.TRAVEL: Decimal("30"),
        Category.BILLS: Decimal("0"),
        Category.SHOPPING: Decimal("0"),
        Category.ENTERTAINMENT: Decimal("0"),
        Category.OTHERS: Decimal("0"),
    }
    assert list(totals) == list(Category)


def test_totals_on_empty_input_are_all_zero() -> None:
    totals = totals_by_category([])

    assert set(totals) == set(Category)
    assert all(amount == 0 for amount in totals.values())


def test_search_matches_note_text(ledger: Ledger, lunch_and_bus) -> None:
    _, bus = lunch_and_bus

    assert filter_by(ledger.snapshot(), ALL_CATEGORIES, "bus") == [bus]
    assert filter_by(ledger.snapshot(), ALL_CATEGORIES, "BUS") == [bus]


def test_all_and_empty_search_return_everything_in_order(ledger: Ledger, lunch_and_bus) -> None:
    ledger.add(5, "Others", "2024-01-03")
    records = ledger.snapshot()

    assert filter_by(records, "All", "") == list(records)
    assert filter_by(records, None, None) == list(records)


def test_category_filter_combines_with_search(ledger: Ledger, lunch_and_bus) -> None:
    lunch, _ = lunch_and_bus
    dinner = ledger.add(20, "Food", "2024-01-03", "Team dinner")
    records = ledger.snapshot()

    assert filter_by(records, "Food", "") == [dinner, lunch]
    assert filter_by(records, Category.FOOD, "dinner") == [dinner]
    assert filter_by(records, "Travel", "lunch") == []
    assert filter_by(records, "Bills", "") == []


def test_unknown_categories_are_excluded_from_totals() -> None:
    records = [
        Record(id="a", amount=Decimal("10.00"), category=Category.BILLS, date=date(2024, 1, 1)),
        Record(id="b", amount=Decimal("7.50"), category="Pets", date=date(2024, 1, 1)),
    ]

    totals = totals_by_category(records)

    assert totals[Category.BILLS] == Decimal("10.00")
    assert sum(totals.values()) == Decimal("10.00")
    assert unknown_category_records(records) == [records[1]]
    assert filter_by(records, "Pets", "") == [records[1]]


def test_category_totals_add_up_to_known_amounts(ledger: Ledger) -> None:
    for amount, category in [("1.10", "Food"), ("2.20", "Food"), ("3.30", "Shopping"), ("4.40", "Others")]:
        ledger.add(amount, category, "2024-01-01")
    records = ledger.snapshot()

    assert sum(totals_by_category(records).values()) == total_amount(records) == Decimal("11.00")


def test_views_do_not_touch_the_ledger(ledger: Ledger, store, lunch_and_bus) -> None:
    before = ledger.snapshot()
    writes = store.writes

    filter_by(before, "Food", "lunch")
    totals_by_category(before)

    assert ledger.snapshot() == before
    assert store.writes == writes
