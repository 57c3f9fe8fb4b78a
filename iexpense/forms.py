"""Transient input buffer used to create a single expense record."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Optional, Union

from .models import Category, ExpenseRecord
from .services import ExpenseStore
from .validators import parse_amount, validate_category, validate_name

CATEGORIES = tuple(category.value for category in Category)


@dataclass
class ExpenseForm:
    """Buffers name, category and amount until the user confirms.

    The form keeps only a handle to the store for the single write made by
    :meth:`confirm`; it never reads the store's sequence.
    """

    store: ExpenseStore
    on_close: Optional[Callable[[], None]] = None
    name: str = ""
    category: Union[Category, str] = Category.PERSONAL
    amount: Union[Decimal, str, int, float] = field(default_factory=lambda: Decimal("0"))

    def build(self) -> ExpenseRecord:
        """Validate the buffered fields and return a new record with a fresh id."""
        return ExpenseRecord(
            name=validate_name(self.name),
            category=validate_category(self.category),
            amount=parse_amount(self.amount),
        )

    def confirm(self) -> ExpenseRecord:
        record = self.build()
        self.store.add(record)
        if self.on_close is not None:
            self.on_close()
        return record
