"""Data models and the persisted wire format for expense records."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, List
from uuid import uuid4

from .exceptions import DecodeError

__all__ = ["Category", "ExpenseRecord", "encode_records", "decode_records"]

FIELD_ORDER = ("id", "name", "category", "amount")


class Category(str, Enum):
    BUSINESS = "Business"
    PERSONAL = "Personal"

    def __str__(self) -> str:
        return self.value


def _new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class ExpenseRecord:
    name: str
    category: Category
    amount: Decimal
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the record to JSON-friendly natives in wire field order."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "amount": str(self.amount),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExpenseRecord":
        """Hydrate a record from JSON-native data, raising DecodeError on bad input."""
        if not isinstance(data, dict):
            raise DecodeError("Expected an object for each expense record")
        missing = [key for key in FIELD_ORDER if key not in data]
        if missing:
            raise DecodeError(f"Expense record is missing fields: {', '.join(missing)}")

        record_id, name = data["id"], data["name"]
        if not isinstance(record_id, str) or not record_id:
            raise DecodeError("Expense id must be a non-empty string")
        if not isinstance(name, str):
            raise DecodeError("Expense name must be a string")
        try:
            category = Category(data["category"])
        except ValueError as exc:
            raise DecodeError(f"Unknown category {data['category']!r}") from exc
        try:
            amount = Decimal(str(data["amount"]))
        except InvalidOperation as exc:
            raise DecodeError(f"Invalid amount {data['amount']!r}") from exc
        if not amount.is_finite() or amount < 0:
            raise DecodeError(f"Amount must be a non-negative number, got {amount}")

        return cls(id=record_id, name=name, category=category, amount=amount)


def encode_records(records: Iterable[ExpenseRecord]) -> bytes:
    """Encode records as an indented UTF-8 JSON array."""
    payload = [record.to_dict() for record in records]
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def decode_records(raw: bytes) -> List[ExpenseRecord]:
    """Decode bytes produced by :func:`encode_records`."""
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DecodeError("Persisted expenses are not valid JSON") from exc

    if not isinstance(payload, list):
        raise DecodeError("Expected a list of expense records")
    return [ExpenseRecord.from_dict(item) for item in payload]
