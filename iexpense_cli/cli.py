"""Console interface for iExpense."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from iexpense.config import Settings, configure_logging
from iexpense.exceptions import OutOfRangeError, ValidationError
from iexpense.forms import CATEGORIES, ExpenseForm
from iexpense.models import Category, ExpenseRecord
from iexpense.services import ExpenseStore
from iexpense.storage import FileKeyValueStore
from iexpense.validators import parse_amount


def _parse_amount(value: str) -> str:
    try:
        parse_amount(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc).capitalize()) from exc
    return value


def _parse_offset(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid offset '{value}'") from exc


def _load_store(data_dir: Path, strict: bool) -> ExpenseStore:
    return ExpenseStore(FileKeyValueStore(data_dir), strict=strict)


def _format_expense(offset: int, record: ExpenseRecord) -> str:
    return f"{offset:>3}  {record.name:<30} {record.category.value:<10} {record.amount}"


def handle_add(args: argparse.Namespace, store: ExpenseStore) -> None:
    form = ExpenseForm(store, name=args.name, category=args.category, amount=args.amount)
    record = form.confirm()
    print("Expense added:\n" + _format_expense(len(store) - 1, record))


def handle_list(args: argparse.Namespace, store: ExpenseStore) -> None:
    if not len(store):
        print("No expenses found.")
        return
    print(f"Found {len(store)} expenses (total {store.total()}):")
    for offset, record in enumerate(store):
        print(_format_expense(offset, record))


def handle_remove(args: argparse.Namespace, store: ExpenseStore) -> None:
    removed = store.remove_at(args.offsets)
    for record in removed:
        print(f"Expense '{record.name}' removed.")
    if not removed:
        print("Nothing removed.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="iExpense CLI")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory to store expense data (default: $IEXPENSE_DATA_DIR or ./data)",
    )
    parser.add_argument("--log-level", help="Logging level (default: $IEXPENSE_LOG_LEVEL or WARNING)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add a new expense")
    add_parser.add_argument("name")
    add_parser.add_argument("--category", default=Category.PERSONAL.value, choices=CATEGORIES)
    add_parser.add_argument("--amount", default="0", type=_parse_amount)

    subparsers.add_parser("list", help="List expenses in display order")

    remove_parser = subparsers.add_parser("remove", help="Remove expenses by offset")
    remove_parser.add_argument("offsets", nargs="+", type=_parse_offset)

    return parser


HANDLERS = {
    "add": handle_add,
    "list": handle_list,
    "remove": handle_remove,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    store = _load_store(args.data_dir or settings.data_dir, settings.strict_offsets)
    try:
        HANDLERS[args.command](args, store)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except OutOfRangeError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
