"""Flask REST API exposing the expense store."""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from iexpense.config import Settings
from iexpense.exceptions import OutOfRangeError, ValidationError
from iexpense.forms import CATEGORIES, ExpenseForm
from iexpense.services import ExpenseStore
from iexpense.storage import FileKeyValueStore, KeyValueStore


def create_app(
    settings: Optional[Settings] = None,
    kv_store: Optional[KeyValueStore] = None,
) -> Flask:
    app = Flask(__name__)
    settings = settings or Settings.from_env()

    if settings.is_dev:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        origins = list(settings.allowed_origins)
        CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
    else:
        CORS(app)

    # The API always runs strict: a client sending bad offsets gets a 400.
    store = ExpenseStore(kv_store or FileKeyValueStore(settings.data_dir), strict=True)
    store.subscribe_errors(lambda exc: app.logger.warning("Persistence failure: %s", exc))
    app.extensions["iexpense.store"] = store

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

    @app.errorhandler(OutOfRangeError)
    def handle_out_of_range(exc: OutOfRangeError):
        return _handle_error(exc, 400, "Offset out of range")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/categories")
    def list_categories():
        return _success({"items": list(CATEGORIES)})

    @app.get("/expenses")
    def list_expenses():
        return _success({
            "items": [record.to_dict() for record in store],
            "total": str(store.total()),
        })

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        form = ExpenseForm(store, name=payload.get("name", ""))
        if "category" in payload:
            form.category = payload["category"]
        if "amount" in payload:
            form.amount = payload["amount"]
        record = form.confirm()
        return _success(record.to_dict(), 201)

    @app.delete("/expenses")
    def delete_expenses():
        payload = _json_body()
        offsets = payload.get("offsets")
        if not isinstance(offsets, list) or not all(
            isinstance(offset, int) and not isinstance(offset, bool) for offset in offsets
        ):
            raise ValidationError("offsets must be a list of integers")
        store.remove_at(offsets)
        return _success({}, 204)

    return app
