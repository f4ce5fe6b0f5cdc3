from ainotes.errors import ValidationError
from ainotes.utils import is_email

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt only accepts this much input


def fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of MIN_PASSWORD_LENGTH characters
    - At most MAX_PASSWORD_BYTES bytes once UTF-8 encoded

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if not fits_bcrypt(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address, rejecting malformed ones."""
    email = email.strip().lower()
    if not is_email(email):
        raise ValidationError(f"Invalid email address: '{email}'")
    return email
