"""Validation helpers shared by the ledger and the persistence codec."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from .exceptions import InvalidAmount, InvalidDate, UnknownCategory, ValidationError
from .models import DATE_FORMAT, Category

DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

# Largest amount whose two-decimal form survives a float round-trip exactly.
MAX_AMOUNT = Decimal("999999999999.99")


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_amount(raw: object, field: str = "amount") -> Decimal:
    """Convert raw input to a positive Decimal with exactly two fraction digits."""
    if raw is None or isinstance(raw, bool):
        raise InvalidAmount(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmount(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise InvalidAmount(f"{field} must be a finite number")
    if amount <= 0:
        raise InvalidAmount(f"{field} must be greater than zero")
    if amount > MAX_AMOUNT:
        raise InvalidAmount(f"{field} must be at most {MAX_AMOUNT}")

    amount = _quantize_two_decimals(amount)
    # Checked after rounding so that e.g. 0.001 cannot become a zero expense.
    if amount <= 0:
        raise InvalidAmount(f"{field} must be greater than zero")
    return amount


def validate_category(value: object, field: str = "category") -> Category:
    if isinstance(value, Category):
        return value
    category = Category.lookup(value.strip() if isinstance(value, str) else value)
    if category is None:
        raise UnknownCategory(f"{field} must be one of: {', '.join(Category.labels())}")
    return category


def validate_date(value: object, field: str = "date", *, default: Optional[date] = None) -> date:
    if value is None and default is not None:
        return default
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value.strip()):
        raise InvalidDate(f"{field} must be a date in YYYY-MM-DD form")
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidDate(f"{field} is not a valid calendar date: {value}") from exc


def validate_note(value: object, field: str = "note") -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


def validate_record_id(value: object, field: str = "id") -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value
