"""Database-specific exceptions."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class SchemaCreationError(DatabaseError):
    """Raised when the identity tables cannot be created."""

    pass
