"""Unit tests for user and password validators."""

from unittest.mock import AsyncMock

import pytest

from identity.application.validators import (
    PasswordValidator,
    UserValidator,
    normalize,
)
from identity.domain.aggregates import User
from infrastructure.settings import IdentitySettings


class TestNormalize:
    """Tests for normalize helper."""

    def test_upper_cases(self):
        assert normalize("Alice@Example.com") == "ALICE@EXAMPLE.COM"

    def test_none_stays_none(self):
        assert normalize(None) is None


class TestUserValidatorUserName:
    """Tests for user name rules."""

    @pytest.fixture
    def validator(self, identity_settings):
        return UserValidator(identity_settings)

    @pytest.mark.asyncio
    async def test_valid_user_name(self, validator, mock_user_store):
        user = User.create("alice", email="alice@example.com")

        errors = await validator.validate_user_name(mock_user_store, user)

        assert errors == []
        mock_user_store.get_by_normalized_user_name.assert_awaited_once_with("ALICE")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_name", [None, "", "   "])
    async def test_empty_user_name_is_invalid(
        self, validator, mock_user_store, user_name
    ):
        user = User.create(user_name)

        errors = await validator.validate_user_name(mock_user_store, user)

        assert [e.code for e in errors] == ["InvalidUserName"]
        mock_user_store.get_by_normalized_user_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_disallowed_character_is_invalid(self, validator, mock_user_store):
        user = User.create("alice smith")

        errors = await validator.validate_user_name(mock_user_store, user)

        assert [e.code for e in errors] == ["InvalidUserName"]
        assert errors[0].description == (
            "Username 'alice smith' is invalid, can only contain letters or digits."
        )

    @pytest.mark.asyncio
    async def test_empty_allowed_characters_permits_anything(self, mock_user_store):
        validator = UserValidator(IdentitySettings(allowed_user_name_characters=""))
        user = User.create("álice smith!")

        errors = await validator.validate_user_name(mock_user_store, user)

        assert errors == []

    @pytest.mark.asyncio
    async def test_duplicate_user_name(self, validator, mock_user_store):
        mock_user_store.get_by_normalized_user_name = AsyncMock(
            return_value=User.create("ALICE")
        )
        user = User.create("alice")

        errors = await validator.validate_user_name(mock_user_store, user)

        assert [e.code for e in errors] == ["DuplicateUserName"]
        assert errors[0].description == "Username 'alice' is already taken."

    @pytest.mark.asyncio
    async def test_own_user_name_is_not_duplicate(self, validator, mock_user_store):
        user = User.create("alice")
        mock_user_store.get_by_normalized_user_name = AsyncMock(return_value=user)

        errors = await validator.validate_user_name(mock_user_store, user)

        assert errors == []


class TestUserValidatorEmail:
    """Tests for email rules."""

    @pytest.fixture
    def validator(self, identity_settings):
        return UserValidator(identity_settings)

    @pytest.mark.asyncio
    async def test_valid_email(self, validator, mock_user_store):
        user = User.create("alice")

        errors = await validator.validate_email(
            mock_user_store, user.id, "alice@example.com"
        )

        assert errors == []
        mock_user_store.get_by_normalized_email.assert_awaited_once_with(
            "ALICE@EXAMPLE.COM"
        )

    @pytest.mark.asyncio
    async def test_malformed_email(self, validator, mock_user_store):
        user = User.create("alice")

        errors = await validator.validate_email(mock_user_store, user.id, "alice")

        assert [e.code for e in errors] == ["InvalidEmail"]
        assert errors[0].description == "Email 'alice' is invalid."

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email",
        [
            "not an@email",
            "alice@localhost",
            "@example.com",
            "alice@",
            "a@b@example.com",
            "alice@exa\nmple.com",
        ],
    )
    async def test_rejects_badly_formed_addresses(
        self, validator, mock_user_store, email
    ):
        user = User.create("alice")

        errors = await validator.validate_email(mock_user_store, user.id, email)

        assert [e.code for e in errors] == ["InvalidEmail"]
        mock_user_store.get_by_normalized_email.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email", ["first.last+tag@sub.example.org", "Alice@Example.com"]
    )
    async def test_accepts_well_formed_addresses(
        self, validator, mock_user_store, email
    ):
        user = User.create("alice")

        errors = await validator.validate_email(mock_user_store, user.id, email)

        assert errors == []

    @pytest.mark.asyncio
    async def test_missing_email_invalid_when_unique_required(
        self, validator, mock_user_store
    ):
        user = User.create("alice")

        errors = await validator.validate_email(mock_user_store, user.id, None)

        assert [e.code for e in errors] == ["InvalidEmail"]

    @pytest.mark.asyncio
    async def test_missing_email_allowed_when_not_unique(self, mock_user_store):
        validator = UserValidator(IdentitySettings(require_unique_email=False))
        user = User.create("alice")

        errors = await validator.validate_email(mock_user_store, user.id, None)

        assert errors == []

    @pytest.mark.asyncio
    async def test_duplicate_email(self, validator, mock_user_store):
        mock_user_store.get_by_normalized_email = AsyncMock(
            return_value=User.create("bob", email="ALICE@example.com")
        )
        user = User.create("alice")

        errors = await validator.validate_email(
            mock_user_store, user.id, "alice@example.com"
        )

        assert [e.code for e in errors] == ["DuplicateEmail"]
        assert errors[0].description == "Email 'alice@example.com' is already taken."

    @pytest.mark.asyncio
    async def test_duplicate_email_ignored_when_not_unique(self, mock_user_store):
        validator = UserValidator(IdentitySettings(require_unique_email=False))
        mock_user_store.get_by_normalized_email = AsyncMock(
            return_value=User.create("bob")
        )
        user = User.create("alice")

        errors = await validator.validate_email(
            mock_user_store, user.id, "alice@example.com"
        )

        assert errors == []
        mock_user_store.get_by_normalized_email.assert_not_called()


class TestUserValidatorOrdering:
    """Tests that user name and email errors accumulate in order."""

    @pytest.mark.asyncio
    async def test_user_name_errors_precede_email_errors(
        self, identity_settings, mock_user_store
    ):
        validator = UserValidator(identity_settings)
        user = User.create("bad name", email="nope")

        errors = await validator.validate(mock_user_store, user)

        assert [e.code for e in errors] == ["InvalidUserName", "InvalidEmail"]


class TestPasswordValidator:
    """Tests for password complexity rules."""

    @pytest.fixture
    def validator(self, identity_settings):
        return PasswordValidator(identity_settings)

    def test_strong_password_passes(self, validator):
        assert validator.validate("Passw0rd!") == []

    def test_reports_every_failing_rule(self, validator):
        """An empty password fails every rule, reported in rule order."""
        errors = validator.validate("")

        assert [e.code for e in errors] == [
            "PasswordTooShort",
            "PasswordRequiresNonAlphanumeric",
            "PasswordRequiresDigit",
            "PasswordRequiresLower",
            "PasswordRequiresUpper",
            "PasswordRequiresUniqueChars",
        ]

    def test_none_treated_as_empty(self, validator):
        assert validator.validate(None)[0].code == "PasswordTooShort"

    def test_too_short_message(self, validator):
        errors = validator.validate("Ab1!")

        assert [e.code for e in errors] == ["PasswordTooShort"]
        assert errors[0].description == "Passwords must be at least 6 characters."

    def test_missing_digit(self, validator):
        assert [e.code for e in validator.validate("Password!")] == [
            "PasswordRequiresDigit"
        ]

    def test_missing_lower(self, validator):
        assert [e.code for e in validator.validate("PASSW0RD!")] == [
            "PasswordRequiresLower"
        ]

    def test_missing_upper(self, validator):
        assert [e.code for e in validator.validate("passw0rd!")] == [
            "PasswordRequiresUpper"
        ]

    def test_missing_symbol(self, validator):
        assert [e.code for e in validator.validate("Passw0rd")] == [
            "PasswordRequiresNonAlphanumeric"
        ]

    def test_non_ascii_letter_counts_as_symbol(self, validator):
        assert validator.validate("Passw0rdé") == []

    def test_too_long_in_bytes(self, validator):
        errors = validator.validate("Aa1!" + "x" * 69)

        assert [e.code for e in errors] == ["PasswordTooLong"]
        assert errors[0].description == "Passwords must be at most 72 bytes long."

    def test_unique_chars(self):
        settings = IdentitySettings(
            password_required_length=6, password_required_unique_chars=5
        )
        validator = PasswordValidator(settings)

        errors = validator.validate("Aa1!Aa1!")

        assert [e.code for e in errors] == ["PasswordRequiresUniqueChars"]
        assert errors[0].description == (
            "Passwords must use at least 5 different characters."
        )

    def test_relaxed_rules(self):
        settings = IdentitySettings(
            password_required_length=1,
            password_require_digit=False,
            password_require_lowercase=False,
            password_require_uppercase=False,
            password_require_non_alphanumeric=False,
        )

        assert PasswordValidator(settings).validate("x") == []
