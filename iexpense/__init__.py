"""Core business logic package for iExpense."""

from .config import Settings
from .exceptions import DecodeError, OutOfRangeError, PersistenceError, ValidationError
from .forms import ExpenseForm
from .models import Category, ExpenseRecord, decode_records, encode_records
from .services import STORE_KEY, ExpenseStore
from .storage import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__all__ = [
    "Category",
    "ExpenseRecord",
    "ExpenseForm",
    "ExpenseStore",
    "STORE_KEY",
    "KeyValueStore",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "Settings",
    "encode_records",
    "decode_records",
    "DecodeError",
    "OutOfRangeError",
    "PersistenceError",
    "ValidationError",
]
