"""Password hashing and verification.

Hashes are bcrypt digests produced by passlib. bcrypt only looks at the first
72 bytes of a password, so longer passwords are rejected instead of being
silently truncated.
"""

from passlib.context import CryptContext

from chirpy.errors import HashError, PasswordMismatchError

BCRYPT_MAX_PASSWORD_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plaintext password for storage.

    Args:
        password: Plaintext password

    Returns:
        Salted, algorithm-tagged bcrypt digest (``$2b$...``)

    Raises:
        HashError: If bcrypt cannot hash the password
    """
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise HashError(f"password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as e:
        raise HashError(str(e)) from e


def check_password_hash(password: str, hashed_password: str) -> None:
    """Verify a plaintext password against a stored digest.

    Raises:
        PasswordMismatchError: If the password does not match
        HashError: If the digest is malformed or the password cannot be processed
    """
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise HashError(f"password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    try:
        matched = pwd_context.verify(password, hashed_password)
    except (ValueError, TypeError) as e:
        raise HashError(str(e)) from e
    if not matched:
        raise PasswordMismatchError("password does not match")


def simulate_password_check() -> None:
    """Spend the time of a real bcrypt verification without checking anything.

    Called when a login names an unknown email.
    """
    pwd_context.dummy_verify()
