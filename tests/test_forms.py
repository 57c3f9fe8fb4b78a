from decimal import Decimal

import pytest

from iexpense.exceptions import ValidationError
from iexpense.forms import CATEGORIES, ExpenseForm
from iexpense.models import Category


def test_defaults_match_new_expense_sheet(store):
    form = ExpenseForm(store)
    assert form.name == ""
    assert form.category is Category.PERSONAL
    assert form.amount == Decimal("0")
    assert CATEGORIES == ("Business", "Personal")


def test_confirm_adds_one_record_and_closes(store):
    closed = []
    form = ExpenseForm(store, on_close=lambda: closed.append(True))
    form.name = "  Train ticket "
    form.category = "business"
    form.amount = "45.10"

    record = form.confirm()

    assert store.items == (record,)
    assert record.name == "Train ticket"
    assert record.category is Category.BUSINESS
    assert record.amount == Decimal("45.10")
    assert closed == [True]


def test_each_confirm_generates_fresh_id(store):
    form = ExpenseForm(store, name="Snack")
    first = form.confirm()
    second = form.confirm()
    assert first.id != second.id
    assert len(store) == 2


def test_zero_amount_is_accepted(store):
    record = ExpenseForm(store, name="Free sample").confirm()
    assert record.amount == Decimal("0")


@pytest.mark.parametrize(
    "fields",
    [
        {"name": ""},
        {"name": "   "},
        {"name": "Lunch", "amount": "-1"},
        {"name": "Lunch", "amount": "twelve"},
        {"name": "Lunch", "amount": None},
        {"name": "Lunch", "amount": "Infinity"},
        {"name": "Lunch", "category": "Travel"},
        {"name": "Lunch", "category": 3},
    ],
)
def test_invalid_input_leaves_store_untouched(store, fields):
    closed = []
    form = ExpenseForm(store, on_close=lambda: closed.append(True), **fields)
    with pytest.raises(ValidationError):
        form.confirm()
    assert store.items == ()
    assert closed == []


def test_amount_accepts_thousands_separator(store):
    record = ExpenseForm(store, name="Laptop", amount="1,299.00").confirm()
    assert record.amount == Decimal("1299.00")


def test_long_names_are_accepted(store):
    record = ExpenseForm(store, name="x" * 500).confirm()
    assert record.name == "x" * 500
