"""User and password validation rules.

Every rule runs and every failure is reported; validators never stop at
the first error.
"""

from __future__ import annotations

from email_validator import EmailNotValidError
from email_validator import validate_email as check_email_syntax

from identity.application.errors import IdentityErrorDescriber
from identity.application.security import BCRYPT_MAX_PASSWORD_BYTES
from identity.application.value_objects import IdentityError
from identity.domain.aggregates import User
from identity.domain.value_objects import UserId
from identity.ports.repositories import IUserStore
from infrastructure.settings import IdentitySettings


def normalize(value: str | None) -> str | None:
    """Canonical form used for case-insensitive lookups."""
    if value is None:
        return None
    return value.upper()


class UserValidator:
    """Validates user names and emails, including uniqueness."""

    def __init__(
        self,
        settings: IdentitySettings,
        describer: IdentityErrorDescriber | None = None,
    ) -> None:
        self._settings = settings
        self._describer = describer or IdentityErrorDescriber()

    async def validate(self, store: IUserStore, user: User) -> list[IdentityError]:
        """Run user name then email rules for the given user."""
        errors = await self.validate_user_name(store, user)
        errors.extend(await self.validate_email(store, user.id, user.email))
        return errors

    async def validate_user_name(
        self, store: IUserStore, user: User
    ) -> list[IdentityError]:
        user_name = user.user_name
        if user_name is None or not user_name.strip():
            return [self._describer.invalid_user_name(user_name)]

        allowed = self._settings.allowed_user_name_characters
        if allowed and any(char not in allowed for char in user_name):
            return [self._describer.invalid_user_name(user_name)]

        owner = await store.get_by_normalized_user_name(normalize(user_name))
        if owner is not None and owner.id != user.id:
            return [self._describer.duplicate_user_name(user_name)]
        return []

    async def validate_email(
        self, store: IUserStore, user_id: UserId, email: str | None
    ) -> list[IdentityError]:
        """Validate an email address on behalf of the user with user_id.

        An empty email is only an error when unique emails are required,
        since uniqueness cannot be checked without one.
        """
        if email is None or not email.strip():
            if self._settings.require_unique_email:
                return [self._describer.invalid_email(email)]
            return []

        try:
            check_email_syntax(email, check_deliverability=False)
        except EmailNotValidError:
            return [self._describer.invalid_email(email)]

        if self._settings.require_unique_email:
            owner = await store.get_by_normalized_email(normalize(email))
            if owner is not None and owner.id != user_id:
                return [self._describer.duplicate_email(email)]
        return []


class PasswordValidator:
    """Checks a plaintext password against the configured complexity rules."""

    def __init__(
        self,
        settings: IdentitySettings,
        describer: IdentityErrorDescriber | None = None,
    ) -> None:
        self._settings = settings
        self._describer = describer or IdentityErrorDescriber()

    def validate(self, password: str | None) -> list[IdentityError]:
        settings = self._settings
        describer = self._describer
        password = password or ""
        errors: list[IdentityError] = []

        if len(password) < settings.password_required_length:
            errors.append(describer.password_too_short(settings.password_required_length))
        if len(password.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
            errors.append(describer.password_too_long(BCRYPT_MAX_PASSWORD_BYTES))
        if settings.password_require_non_alphanumeric and all(
            _is_letter_or_digit(char) for char in password
        ):
            errors.append(describer.password_requires_non_alphanumeric())
        if settings.password_require_digit and not any(
            "0" <= char <= "9" for char in password
        ):
            errors.append(describer.password_requires_digit())
        if settings.password_require_lowercase and not any(
            "a" <= char <= "z" for char in password
        ):
            errors.append(describer.password_requires_lower())
        if settings.password_require_uppercase and not any(
            "A" <= char <= "Z" for char in password
        ):
            errors.append(describer.password_requires_upper())
        if len(set(password)) < settings.password_required_unique_chars:
            errors.append(
                describer.password_requires_unique_chars(
                    settings.password_required_unique_chars
                )
            )
        return errors


def _is_letter_or_digit(char: str) -> bool:
    # ASCII only: accented letters count as symbols
    return ("0" <= char <= "9") or ("a" <= char <= "z") or ("A" <= char <= "Z")
