"""Request validation rules."""

from chirpy.errors import ValidationError

MAX_CHIRP_LENGTH = 140
CHIRP_TOO_LONG = "Chirp is too long"


def validate_chirp_body(body: str) -> str:
    """Check a chirp body against the length limit.

    Length is counted in characters (code points), not bytes.

    Returns:
        The body, unchanged

    Raises:
        ValidationError: If the body is longer than ``MAX_CHIRP_LENGTH``
    """
    if len(body) > MAX_CHIRP_LENGTH:
        raise ValidationError(CHIRP_TOO_LONG)
    return body
