"""Console interface for the expense ledger."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable, List, Optional

from smart_expenses.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from smart_expenses.ledger import Ledger
from smart_expenses.logging_utils import configure_logging
from smart_expenses.models import ALL_CATEGORIES, DATE_FORMAT, Category, Record
from smart_expenses.storage import FileBlobStore
from smart_expenses.views import filter_by, total_amount, totals_by_category, unknown_category_records


def _parse_date(value: str) -> str:
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc
    return value


def _parse_amount(value: str) -> str:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc
    if not amount.is_finite() or amount <= 0:
        raise argparse.ArgumentTypeError("Amount must be greater than zero")
    return value


def _format_expense(expense: Record) -> str:
    return (
        f"[{expense.id}] {expense.amount:.2f} - {expense.category_label}\n"
        f"  {expense.date.isoformat()} | {expense.note or '-'}\n"
    )


def handle_add(args: argparse.Namespace, ledger: Ledger) -> None:
    expense = ledger.add(args.amount, args.category, args.date, args.note)
    print("Expense added:\n" + _format_expense(expense))


def handle_list(args: argparse.Namespace, ledger: Ledger) -> None:
    expenses = filter_by(ledger.snapshot(), args.category, args.search)
    if not expenses:
        print("No expenses found.")
        return
    print(f"Expenses ({len(expenses)}, total {total_amount(expenses):.2f}):")
    for expense in expenses:
        print(_format_expense(expense))


def handle_delete(
    args: argparse.Namespace, ledger: Ledger, confirm: Optional[Callable[[str], str]] = None
) -> None:
    expense = ledger.get(args.id)
    if not args.yes:
        answer = (confirm or input)(f"Delete expense {expense.id} ({expense.amount:.2f} {expense.category_label})? [y/N] ")
        if answer.strip().lower() not in {"y", "yes"}:
            print("Nothing deleted.")
            return
    ledger.remove(args.id)
    print(f"Expense {args.id} deleted.")


def handle_summary(args: argparse.Namespace, ledger: Ledger) -> None:
    records = ledger.snapshot()
    totals = totals_by_category(records)
    width = max(len(category.value) for category in totals)
    print("Category-wise expenses:")
    for category, amount in totals.items():
        print(f"  {category.value:<{width}}  {amount:>12.2f}")
    print(f"  {'Total':<{width}}  {sum(totals.values(), start=Decimal('0.00')):>12.2f}")
    excluded = unknown_category_records(records)
    if excluded:
        print(f"{len(excluded)} expense(s) with an unknown category are not included.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Smart Expense Tracker CLI")
    parser.add_argument(
        "--data-dir",
        default="data",
        type=Path,
        help="Directory to store JSON data (default: ./data)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $SMART_EXPENSES_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add a new expense")
    add_parser.add_argument("amount", type=_parse_amount)
    add_parser.add_argument("category", choices=Category.labels())
    add_parser.add_argument("--date", type=_parse_date, help="YYYY-MM-DD (default: today)")
    add_parser.add_argument("--note", default="")

    list_parser = subparsers.add_parser("list", help="List expenses")
    list_parser.add_argument(
        "--category", default=ALL_CATEGORIES, choices=[ALL_CATEGORIES] + Category.labels()
    )
    list_parser.add_argument("--search", default="", help="Case-insensitive text to find in notes")

    delete_parser = subparsers.add_parser("delete", help="Delete an expense")
    delete_parser.add_argument("id")
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    subparsers.add_parser("summary", help="Show per-category totals")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    ledger = Ledger(FileBlobStore(args.data_dir))

    try:
        if args.command == "add":
            handle_add(args, ledger)
        elif args.command == "list":
            handle_list(args, ledger)
        elif args.command == "delete":
            handle_delete(args, ledger)
        elif args.command == "summary":
            handle_summary(args, ledger)
        else:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown command: {args.command}")
            return 2
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
