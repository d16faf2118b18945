"""Storage layer errors surfaced to the HTTP boundary."""


class StorageError(Exception):
    """Raised when a database operation fails."""

    status_code = 500


class StorageUnavailable(StorageError):
    """Raised when the database cannot be reached."""

    status_code = 503
