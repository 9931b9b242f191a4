"""Store exceptions for the identity context.

These exceptions represent persistence-level failures raised by user store
implementations. The user manager converts them into failed identity
results; they never reach the HTTP layer directly.
"""


class ConcurrencyFailureError(Exception):
    """Raised when a write targets a user that was modified or removed.

    The stored concurrency stamp no longer matches the one the caller read,
    so the write was not applied.
    """

    pass


class DuplicateUserError(Exception):
    """Raised when the database rejects a user because of a unique index.

    Validation normally catches duplicates first; this covers the race
    where two requests claim the same name or email concurrently.
    """

    pass
