"""Password strength rules applied at registration.

Login never re-checks strength; the stored hash is the only authority
there.
"""

import re
from dataclasses import dataclass

from codecollab.domain.exceptions import FieldError

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")


@dataclass(frozen=True)
class PasswordValidator:
    """Length bounds plus character-class requirements.

    The defaults are 6 to 128 characters with at least one lowercase letter,
    one uppercase letter and one digit.
    """

    min_length: int = 6
    max_length: int = 128
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_digit: bool = True

    def validate(self, password: str, field: str = "password") -> list[FieldError]:
        """Check ``password`` against every rule.

        Args:
            password: Candidate password.
            field: Field name to report the errors under.

        Returns:
            One FieldError per broken rule, in a stable order. Empty when
            the password is acceptable.
        """
        checks = [
            (
                len(password) >= self.min_length,
                f"Password must be at least {self.min_length} characters",
            ),
            (
                len(password) <= self.max_length,
                f"Password must be at most {self.max_length} characters",
            ),
            (
                not self.require_lowercase or bool(_LOWER.search(password)),
                "Password must contain at least one lowercase letter",
            ),
            (
                not self.require_uppercase or bool(_UPPER.search(password)),
                "Password must contain at least one uppercase letter",
            ),
            (
                not self.require_digit or bool(_DIGIT.search(password)),
                "Password must contain at least one digit",
            ),
        ]
        return [FieldError(field, message) for ok, message in checks if not ok]

    def is_valid(self, password: str) -> bool:
        return not self.validate(password)


default_password_validator = PasswordValidator()
