"""
Custom exceptions for the database sanitizer.
"""


class SanitizeError(Exception):
    """Base exception for all sanitizer errors."""
    pass


class ConfigError(SanitizeError):
    """Raised for configuration errors."""
    pass


class ConfirmationDeclined(SanitizeError):
    """Raised when the operator declines (or never gives) confirmation."""
    pass


class ConfirmationRequired(ConfirmationDeclined):
    """Raised when a destructive operation is invoked without confirmation."""
    pass


class StorePrerequisiteMissing(SanitizeError):
    """Raised when an optional stage's plugin tables/registration are absent."""

    def __init__(self, stage: str, prerequisite: str):
        self.stage = stage
        self.prerequisite = prerequisite
        super().__init__(f"{stage}: prerequisite not present ({prerequisite})")


class RowWriteFailure(SanitizeError):
    """Raised when the update of a single record fails."""

    def __init__(self, table: str, row_id, cause: Exception):
        self.table = table
        self.row_id = row_id
        self.cause = cause
        super().__init__(f"Could not update {table} row {row_id}: {cause}")


class BulkOperationFailure(SanitizeError):
    """Raised when a batched update/delete/truncate against the store fails."""

    def __init__(self, operation: str, table: str, cause: Exception):
        self.operation = operation
        self.table = table
        self.cause = cause
        super().__init__(f"{operation} on {table} failed: {cause}")
