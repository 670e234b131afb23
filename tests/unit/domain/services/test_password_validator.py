"""Unit tests for PasswordValidator."""

from codecollab.domain.services.password_validator import (
    PasswordValidator,
    default_password_validator,
)


class TestPasswordValidator:
    """Tests for the password strength rules."""

    def test_valid_password(self):
        assert default_password_validator.validate("Passw0rd") == []
        assert default_password_validator.is_valid("aB3def")

    def test_collects_every_failure(self):
        """Every broken rule is reported, not only the first."""
        errors = default_password_validator.validate("abc")

        assert [e.message for e in errors] == [
            "Password must be at least 6 characters",
            "Password must contain at least one uppercase letter",
            "Password must contain at least one digit",
        ]
        assert {e.field for e in errors} == {"password"}

    def test_max_length(self):
        errors = default_password_validator.validate("Aa1" * 43)

        assert [e.message for e in errors] == ["Password must be at most 128 characters"]

    def test_custom_policy(self):
        validator = PasswordValidator(min_length=4, require_uppercase=False, require_digit=False)

        assert validator.is_valid("abcd")
        assert not validator.is_valid("abc")

    def test_custom_field_name(self):
        errors = default_password_validator.validate("x", field="newPassword")

        assert errors[0].to_dict() == {
            "field": "newPassword",
            "message": "Password must be at least 6 characters",
        }
