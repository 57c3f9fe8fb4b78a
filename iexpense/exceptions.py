"""Domain-specific exceptions for the iExpense core."""

class ValidationError(ValueError):
    """Raised when form input does not meet validation requirements."""


class DecodeError(ValueError):
    """Raised when persisted bytes cannot be decoded into expense records."""


class PersistenceError(IOError):
    """Raised when the key-value store cannot be read or written."""


class OutOfRangeError(IndexError):
    """Raised when removal offsets fall outside the current sequence."""

    def __init__(self, offsets, size: int) -> None:
        try:
            self.offsets = sorted(offsets)
        except TypeError:
            self.offsets = list(offsets)
        self.size = size
        super().__init__(
            f"Offsets {self.offsets} out of range for {size} expense(s)"
        )
