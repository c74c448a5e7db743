"""Flask REST API exposing the expense ledger."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from smart_expenses.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from smart_expenses.ledger import Ledger
from smart_expenses.logging_utils import configure_logging
from smart_expenses.models import ALL_CATEGORIES, Category, Record
from smart_expenses.storage import FileBlobStore
from smart_expenses.views import filter_by, total_amount, totals_by_category, unknown_category_records

# Pie slice colours, one per category in display order.
CHART_COLORS = ["#FF6384", "#36A2EB", "#FFCE56", "#28a745", "#6f42c1", "#fd7e14"]


def _money(amount: Decimal) -> str:
    return f"{amount:.2f}"


def _record_payload(record: Record) -> Dict[str, Any]:
    payload = record.to_dict()
    payload["amount"] = _money(record.amount)
    return payload


def pie_chart_data(totals: Mapping[Category, Decimal]) -> Dict[str, Any]:
    """Chart.js-shaped dataset for the category pie."""
    return {
        "labels": [category.value for category in totals],
        "datasets": [
            {
                "label": "Expenses",
                "data": [float(amount) for amount in totals.values()],
                "backgroundColor": CHART_COLORS[: len(totals)],
            }
        ],
    }


def create_app(data_dir: Optional[Path] = None) -> Flask:
    app = Flask(__name__)
    configure_logging()

    env_name = os.getenv("SMART_EXPENSES_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("SMART_EXPENSES_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    data_path = Path(data_dir or os.getenv("SMART_EXPENSES_DATA_DIR") or "data")
    ledger = Ledger(FileBlobStore(data_path))

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/categories")
    def list_categories():
        return _success({"items": Category.labels()})

    @app.get("/expenses")
    def list_expenses():
        expenses = filter_by(
            ledger.snapshot(),
            request.args.get("category") or ALL_CATEGORIES,
            request.args.get("search", ""),
        )
        return _success({
            "items": [_record_payload(expense) for expense in expenses],
            "count": len(expenses),
            "total": _money(total_amount(expenses)),
        })

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        expense = ledger.add(
            payload.get("amount"),
            payload.get("category"),
            payload.get("date"),
            payload.get("note", ""),
        )
        return _success(_record_payload(expense), 201)

    @app.get("/expenses/<expense_id>")
    def get_expense(expense_id: str):
        return _success(_record_payload(ledger.get(expense_id)))

    @app.delete("/expenses/<expense_id>")
    def delete_expense(expense_id: str):
        ledger.remove(expense_id)
        return _success({}, 204)

    @app.get("/summary")
    def summary():
        records = ledger.snapshot()
        totals = totals_by_category(records)
        return _success({
            "totals": {category.value: _money(amount) for category, amount in totals.items()},
            "total": _money(sum(totals.values(), start=Decimal("0.00"))),
            "excluded": len(unknown_category_records(records)),
            "chart": pie_chart_data(totals),
        })

    return app
