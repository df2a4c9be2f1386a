"""Error taxonomy for SAANS Capture."""


class SaansError(Exception):
    """Base class for all errors raised by this package."""


class IndexOutOfRangeError(SaansError, IndexError):
    """Raised when a record position passed to the store is invalid."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Record index {index} out of range (collection has {size} records)")


class SchemaError(SaansError):
    """Raised when a schema cannot be constructed from its labels."""


class DuplicateFieldLabelError(SchemaError):
    """Two fields share the same label."""


class DuplicateFieldKeyError(SchemaError):
    """Two distinct labels derive to the same key."""


class EmptyFieldKeyError(SchemaError):
    """A label derives to an empty key."""


class AdvisoryCondition(SaansError):
    """
    A non-fatal, reportable absence of data.

    The operation that raised it was a no-op; existing data is untouched.
    """


class NoDataFoundError(AdvisoryCondition):
    """A decoded spreadsheet contained no data rows."""


class EmptyInputError(AdvisoryCondition):
    """Export was requested over an empty record collection."""


class WorkbookDecodeError(SaansError):
    """Raised when spreadsheet bytes cannot be decoded."""
