"""Database infrastructure - shared engine and session primitives."""

from infrastructure.database.exceptions import (
    DatabaseError,
    SchemaCreationError,
)

__all__ = [
    "DatabaseError",
    "SchemaCreationError",
]
