"""Input validation for request payloads.

Each validator takes an input struct and returns a mapping of field name to
the list of messages for every rule that field violates. An empty mapping
means the input is valid. Every field is checked; nothing short-circuits.
"""

from typing import Any

from email_validator import EmailNotValidError, validate_email

from postboard.schemas.auth import SigninInput, SignupInput
from postboard.schemas.post import PostInput
from postboard.services.errors import FieldErrors

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
TITLE_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8


def _label(field: str) -> str:
    return field.replace("_", " ")


def _add(errors: FieldErrors, field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


def _check_required_string(errors: FieldErrors, field: str, value: Any) -> bool:
    """Check presence and type. Returns True when further rules can run."""
    if value is None or (isinstance(value, str) and value.strip() == ""):
        _add(errors, field, f"The {_label(field)} field is required.")
        return False
    if not isinstance(value, str):
        _add(errors, field, f"The {_label(field)} field must be a string.")
        return False
    return True


def _check_max(errors: FieldErrors, field: str, value: str, limit: int) -> None:
    if len(value) > limit:
        _add(
            errors,
            field,
            f"The {_label(field)} field must not be greater than {limit} characters.",
        )


def is_valid_email(value: str) -> bool:
    """Check that an address is well-formed. Deliverability is not checked."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _check_email(errors: FieldErrors, value: Any) -> None:
    if not _check_required_string(errors, "email", value):
        return
    if not is_valid_email(value):
        _add(errors, "email", "The email field must be a valid email address.")
    _check_max(errors, "email", value, EMAIL_MAX_LENGTH)


def validate_signup(data: SignupInput) -> FieldErrors:
    """Validate a registration payload."""
    errors: FieldErrors = {}

    if _check_required_string(errors, "name", data.name):
        _check_max(errors, "name", data.name, NAME_MAX_LENGTH)

    _check_email(errors, data.email)

    if _check_required_string(errors, "password", data.password):
        if len(data.password) < PASSWORD_MIN_LENGTH:
            _add(
                errors,
                "password",
                f"The password field must be at least {PASSWORD_MIN_LENGTH} characters.",
            )
        if data.password_confirmation != data.password:
            _add(errors, "password", "The password field confirmation does not match.")

    return errors


def validate_signin(data: SigninInput) -> FieldErrors:
    """Validate a login payload."""
    errors: FieldErrors = {}
    _check_email(errors, data.email)
    _check_required_string(errors, "password", data.password)
    return errors


def _check_title(errors: FieldErrors, value: Any) -> None:
    if _check_required_string(errors, "title", value):
        _check_max(errors, "title", value, TITLE_MAX_LENGTH)


def _check_content(errors: FieldErrors, value: Any) -> None:
    _check_required_string(errors, "content", value)


def validate_post_create(data: PostInput) -> FieldErrors:
    """Validate a new post: both fields are required."""
    errors: FieldErrors = {}
    _check_title(errors, data.title)
    _check_content(errors, data.content)
    return errors


def validate_post_update(data: PostInput) -> FieldErrors:
    """Validate a partial update.

    Only fields present in the payload are checked, against the same rules
    as on create. An explicit null counts as present.
    """
    errors: FieldErrors = {}
    present = data.model_fields_set
    if "title" in present:
        _check_title(errors, data.title)
    if "content" in present:
        _check_content(errors, data.content)
    return errors
