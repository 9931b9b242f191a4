"""Error descriptions produced by the user manager.

Codes and wording follow the conventions of common identity frameworks so
clients that already parse those messages keep working.
"""

from __future__ import annotations

from identity.application.value_objects import IdentityError


class IdentityErrorDescriber:
    """Factory for every IdentityError the user manager can emit.

    Subclass and override individual methods to localize or reword messages.
    """

    def default_error(self) -> IdentityError:
        return IdentityError("DefaultError", "An unknown failure has occurred.")

    def concurrency_failure(self) -> IdentityError:
        return IdentityError(
            "ConcurrencyFailure",
            "Optimistic concurrency failure, object has been modified.",
        )

    def invalid_user_name(self, user_name: str | None) -> IdentityError:
        return IdentityError(
            "InvalidUserName",
            f"Username '{user_name or ''}' is invalid, can only contain letters or digits.",
        )

    def duplicate_user_name(self, user_name: str) -> IdentityError:
        return IdentityError(
            "DuplicateUserName", f"Username '{user_name}' is already taken."
        )

    def invalid_email(self, email: str | None) -> IdentityError:
        return IdentityError("InvalidEmail", f"Email '{email or ''}' is invalid.")

    def duplicate_email(self, email: str) -> IdentityError:
        return IdentityError("DuplicateEmail", f"Email '{email}' is already taken.")

    def password_too_short(self, length: int) -> IdentityError:
        return IdentityError(
            "PasswordTooShort", f"Passwords must be at least {length} characters."
        )

    def password_too_long(self, max_bytes: int) -> IdentityError:
        return IdentityError(
            "PasswordTooLong", f"Passwords must be at most {max_bytes} bytes long."
        )

    def password_requires_unique_chars(self, unique_chars: int) -> IdentityError:
        return IdentityError(
            "PasswordRequiresUniqueChars",
            f"Passwords must use at least {unique_chars} different characters.",
        )

    def password_requires_non_alphanumeric(self) -> IdentityError:
        return IdentityError(
            "PasswordRequiresNonAlphanumeric",
            "Passwords must have at least one non alphanumeric character.",
        )

    def password_requires_digit(self) -> IdentityError:
        return IdentityError(
            "PasswordRequiresDigit",
            "Passwords must have at least one digit ('0'-'9').",
        )

    def password_requires_lower(self) -> IdentityError:
        return IdentityError(
            "PasswordRequiresLower",
            "Passwords must have at least one lowercase ('a'-'z').",
        )

    def password_requires_upper(self) -> IdentityError:
        return IdentityError(
            "PasswordRequiresUpper",
            "Passwords must have at least one uppercase ('A'-'Z').",
        )
