"""Tkinter desktop application for iExpense."""

from __future__ import annotations

import argparse
import tkinter as tk
from decimal import Decimal, InvalidOperation
from pathlib import Path
from tkinter import messagebox, ttk
from typing import Iterable, Optional

from iexpense.config import Settings, configure_logging
from iexpense.exceptions import OutOfRangeError, ValidationError
from iexpense.forms import CATEGORIES, ExpenseForm
from iexpense.models import Category
from iexpense.services import ExpenseStore
from iexpense.storage import FileKeyValueStore


PRIMARY_BG = "#0f172a"
SECONDARY_BG = "#1e293b"
ACCENT_BG = "#1d4ed8"
ACCENT_ACTIVE_BG = "#2563eb"
TEXT_PRIMARY = "#e2e8f0"
TEXT_MUTED = "#94a3b8"


def format_amount_display(value: Decimal | str) -> str:
    if isinstance(value, Decimal):
        return f"{value:,.2f}"
    sanitized = (value or "").replace(",", "").strip()
    if not sanitized:
        return ""
    try:
        amount = Decimal(sanitized)
    except InvalidOperation:
        return value.strip()
    return f"{amount:,.2f}"


class AddExpenseDialog(tk.Toplevel):
    """Sheet collecting one expense; closes itself once the form is confirmed."""

    def __init__(self, master: tk.Misc, store: ExpenseStore) -> None:
        super().__init__(master, background=SECONDARY_BG)
        self.title("Add new expense")
        self.transient(master)
        self.resizable(False, False)

        self.form = ExpenseForm(store, on_close=self.destroy)
        self.name_var = tk.StringVar()
        self.category_var = tk.StringVar(value=Category.PERSONAL.value)
        self.amount_var = tk.StringVar(value="0.00")

        body = ttk.Frame(self, padding=16, style="Panel.TFrame")
        body.grid(row=0, column=0, sticky="nsew")
        body.columnconfigure(0, weight=1)

        ttk.Label(body, text="Name", style="FormLabel.TLabel").grid(row=0, column=0, sticky="w")
        name_entry = ttk.Entry(body, textvariable=self.name_var, style="App.TEntry")
        name_entry.grid(row=1, column=0, sticky="ew", pady=(0, 8))

        ttk.Label(body, text="Type", style="FormLabel.TLabel").grid(row=2, column=0, sticky="w")
        ttk.Combobox(
            body,
            textvariable=self.category_var,
            values=CATEGORIES,
            state="readonly",
            style="App.TCombobox",
        ).grid(row=3, column=0, sticky="ew", pady=(0, 8))

        ttk.Label(body, text="Amount", style="FormLabel.TLabel").grid(row=4, column=0, sticky="w")
        amount_entry = ttk.Entry(body, textvariable=self.amount_var, style="App.TEntry")
        amount_entry.grid(row=5, column=0, sticky="ew", pady=(0, 8))
        amount_entry.bind("<FocusOut>", self._handle_amount_focus_out)

        ttk.Button(body, text="Save", command=self.save, style="Primary.TButton").grid(
            row=6, column=0, sticky="e", pady=(8, 0)
        )
        name_entry.focus_set()

    def save(self) -> None:
        self.form.name = self.name_var.get()
        self.form.category = self.category_var.get()
        self.form.amount = self.amount_var.get()
        try:
            self.form.confirm()
        except ValidationError as exc:
            messagebox.showerror("Invalid Expense", str(exc), parent=self)

    def _handle_amount_focus_out(self, _event: object) -> None:
        self.amount_var.set(format_amount_display(self.amount_var.get()))


class ExpenseList(ttk.Frame):
    """Table of the store's records; re-renders on every store mutation."""

    def __init__(self, master: tk.Misc, store: ExpenseStore) -> None:
        super().__init__(master, padding=16, style="Panel.TFrame")
        self.store = store
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        columns = ("name", "category", "amount")
        self.tree = ttk.Treeview(
            self,
            columns=columns,
            show="headings",
            height=12,
            style="App.Treeview",
        )
        headings = {"name": "Name", "category": "Type", "amount": "Amount"}
        for key, label in headings.items():
            self.tree.heading(key, text=label, anchor="w")
            self.tree.column(key, width=220 if key == "name" else 120, anchor="w")

        vsb = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscroll=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

        button_bar = ttk.Frame(self, style="Panel.TFrame")
        button_bar.grid(row=1, column=0, columnspan=2, sticky="e", pady=8)
        ttk.Button(
            button_bar,
            text="Delete Selected",
            command=self.delete_selected,
            style="Secondary.TButton",
        ).grid(row=0, column=0, padx=4)
        ttk.Button(
            button_bar,
            text="Add Expense",
            command=self.open_add_dialog,
            style="Primary.TButton",
        ).grid(row=0, column=1, padx=4)

        self._unsubscribe = store.subscribe(lambda _store: self.populate())
        self.bind("<Destroy>", self._handle_destroy)
        self.populate()

    def populate(self) -> None:
        self.tree.delete(*self.tree.get_children())
        for offset, record in enumerate(self.store):
            values = (record.name, record.category.value, format_amount_display(record.amount))
            self.tree.insert("", "end", iid=str(offset), values=values)

    def delete_selected(self) -> None:
        selection = self.tree.selection()
        if not selection:
            messagebox.showinfo("No selection", "Please select an expense to delete.", parent=self)
            return
        try:
            self.store.remove_at(int(item_id) for item_id in selection)
        except OutOfRangeError as exc:
            messagebox.showwarning("Not Found", str(exc), parent=self)

    def open_add_dialog(self) -> None:
        AddExpenseDialog(self, self.store)

    def _handle_destroy(self, event: tk.Event) -> None:
        if event.widget is self:
            self._unsubscribe()


class ExpenseTrackerApp(tk.Tk):
    def __init__(self, store: ExpenseStore) -> None:
        super().__init__()
        self.title("iExpense")
        self.geometry("640x520")
        self.configure(background=PRIMARY_BG)
        self.store = store

        self.total_var = tk.StringVar()
        self._configure_styles()
        self._build_layout()

        store.subscribe(lambda _store: self.refresh_summary())
        store.subscribe_errors(self._show_persistence_error)
        self.refresh_summary()

    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        style.theme_use("clam")
        style.configure("Header.TFrame", background=PRIMARY_BG)
        style.configure("Panel.TFrame", background=SECONDARY_BG)
        style.configure("FormLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9))
        style.configure("Header.TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 20, "bold"))
        style.configure("Total.TLabel", background=PRIMARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 12, "bold"))
        style.configure(
            "App.TEntry",
            fieldbackground=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            insertcolor=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
        )
        style.configure(
            "App.TCombobox",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            arrowcolor=TEXT_PRIMARY,
        )
        style.map("App.TCombobox", fieldbackground=[("readonly", SECONDARY_BG)])
        style.configure(
            "Primary.TButton",
            background=ACCENT_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
            padding=(18, 6),
        )
        style.map("Primary.TButton", background=[("active", ACCENT_ACTIVE_BG)])
        style.configure(
            "Secondary.TButton",
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            padding=(14, 6),
        )
        style.map("Secondary.TButton", background=[("active", ACCENT_BG)])
        style.configure(
            "App.Treeview",
            background=SECONDARY_BG,
            fieldbackground=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            rowheight=28,
        )
        style.map(
            "App.Treeview",
            background=[("selected", ACCENT_BG)],
            foreground=[("selected", TEXT_PRIMARY)],
        )

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        header = ttk.Frame(self, padding=20, style="Header.TFrame")
        header.grid(row=0, column=0, sticky="ew")
        header.columnconfigure(0, weight=1)
        ttk.Label(header, text="iExpense", style="Header.TLabel").grid(row=0, column=0, sticky="w")
        ttk.Label(header, textvariable=self.total_var, style="Total.TLabel").grid(row=0, column=1, sticky="e")

        self.expense_list = ExpenseList(self, self.store)
        self.expense_list.grid(row=1, column=0, sticky="nsew")

    def refresh_summary(self) -> None:
        self.total_var.set(f"Total {format_amount_display(self.store.total())}")

    def _show_persistence_error(self, exc: Exception) -> None:
        messagebox.showwarning(
            "Storage Error",
            f"Changes could not be saved and will be lost on exit.\n\n{exc}",
            parent=self,
        )


def main(argv: Optional[Iterable[str]] = None) -> None:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Tkinter desktop app for iExpense")
    parser.add_argument(
        "--data-dir",
        default=settings.data_dir,
        type=Path,
        help="Directory containing expense data (default: $IEXPENSE_DATA_DIR or ./data)",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(settings.log_level)

    store = ExpenseStore(FileKeyValueStore(args.data_dir), strict=settings.strict_offsets)
    app = ExpenseTrackerApp(store)
    app.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
