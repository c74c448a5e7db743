"""Domain-specific exceptions for the expense ledger core."""


class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class InvalidAmount(ValidationError):
    """Raised when an amount is missing, non-numeric, non-finite or not positive."""


class UnknownCategory(ValidationError):
    """Raised when a category is outside the known category set."""


class InvalidDate(ValidationError):
    """Raised when a date is not a real calendar date in YYYY-MM-DD form."""


class RecordNotFoundError(LookupError):
    """Raised when an expense record cannot be located."""


class PersistenceError(IOError):
    """Raised when the persistence layer encounters unrecoverable issues."""


class StoreReadFailure(PersistenceError):
    """Raised when a persisted snapshot cannot be read or parsed."""
