"""Password hashing for user accounts.

Uses bcrypt with a per-hash random salt. bcrypt only consumes the first
72 bytes of its input, so longer passwords are rejected by validation
rather than silently truncated.
"""

import bcrypt

BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt.

    Args:
        password: The plaintext password

    Returns:
        The bcrypt hash as a string

    Raises:
        ValueError: If the encoded password exceeds bcrypt's input limit
    """
    encoded = password.encode()
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(
            f"Password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes when encoded"
        )
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against its bcrypt hash.

    Args:
        password: The plaintext password to check
        password_hash: The stored bcrypt hash

    Returns:
        True if the password matches the hash, False otherwise
    """
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash or over-long input
        return False
