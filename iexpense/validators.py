"""Validation helpers shared by the expense form and the record decoder."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .exceptions import ValidationError
from .models import Category


def parse_amount(raw: object, field: str = "amount") -> Decimal:
    """Convert raw input to a non-negative Decimal, keeping its precision."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    if isinstance(raw, str):
        raw = raw.replace(",", "").strip()
    try:
        amount = Decimal(str(raw))
    except (InvalidOperation, TypeError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative")
    return amount


def validate_name(value: object, field: str = "name") -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    return trimmed


def validate_category(value: object, field: str = "category") -> Category:
    if isinstance(value, Category):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    canonical = value.strip().lower()
    for category in Category:
        if category.value.lower() == canonical:
            return category
    allowed = ", ".join(category.value for category in Category)
    raise ValidationError(f"{field} must be one of: {allowed}")
