"""Password hashing utility using Argon2.

Provides salted password hashing and verification using the Argon2id
algorithm. The encoded hash carries the algorithm, its parameters and the
salt, so verification needs nothing but the stored string.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

# Argon2id with the library defaults (64 MiB, 3 passes)
_hasher = PasswordHasher()

# Used when a login names an unknown email so the failure path still pays for
# one full verification.
DUMMY_PASSWORD_HASH = _hasher.hash("codecollab-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Example:
        >>> hashed = hash_password("Passw0rd")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Never raises on a mismatch or on a malformed hash.

    Args:
        password: The plaintext password to verify.
        hashed: The hashed password to verify against.

    Returns:
        True if the password matches, False otherwise.

    Example:
        >>> hashed = hash_password("Passw0rd")
        >>> verify_password("Passw0rd", hashed)
        True
        >>> verify_password("wrong", hashed)
        False
    """
    try:
        return _hasher.verify(hashed, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash needs to be rehashed.

    This should be called after successful password verification.
    If True, the password should be rehashed with the current parameters.

    Args:
        hashed: The hashed password to check.

    Returns:
        True if the hash should be updated, False otherwise.
    """
    return _hasher.check_needs_rehash(hashed)
