"""Error kinds raised inside Chirpy and mapped to HTTP responses by the handlers."""


class ChirpyError(Exception):
    """Base class for Chirpy errors."""


class DecodeError(ChirpyError):
    """Request body is not valid JSON or does not match the expected shape."""


class ValidationError(ChirpyError):
    """A decoded request violates a semantic rule (e.g. chirp length)."""


class AuthError(ChirpyError):
    """Unknown identity or wrong credentials.

    Both cases are collapsed into this one kind so callers cannot tell them apart.
    """


class NotFoundError(ChirpyError):
    """Requested entity does not exist."""


class StoreError(ChirpyError):
    """The underlying database failed (constraint violation, connection error, ...)."""


class ConfigError(ChirpyError):
    """Required configuration is missing."""


class HashError(ChirpyError):
    """The password hashing algorithm could not process its input."""


class PasswordMismatchError(ChirpyError):
    """Password does not match the stored hash."""
