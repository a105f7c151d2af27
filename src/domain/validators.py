"""
Field validators for contact form submissions.

One validator per field kind. Each returns a ValidationResult and never
raises for bad input; the pipeline calls them directly in a fixed order.
``validate`` dispatches by kind name for callers that only have the name.
"""

import logging
from typing import Callable, Dict

import email_validator
from email_validator import EmailNotValidError

from .app_version import parse_app_version
from .errors import InvalidAppVersionError, UnknownFieldError
from .models import ValidationResult

logger = logging.getLogger(__name__)

MAX_SUBJECT_LENGTH = 50
MAX_MESSAGE_LENGTH = 500


def _length(value: str) -> int:
    # Limits are counted in UTF-8 bytes
    return len(value.encode('utf-8'))


def validate_email(value: str) -> ValidationResult:
    """
    Check that value is exactly one well-formed email address.

    Accepts a bare address ("user@example.com") or one with a display name
    ("User <user@example.com>"). Syntax only; no DNS lookups. The
    email-validator error text becomes the failure reason.

    Args:
        value: Submitted email address

    Returns:
        ValidationResult for the "email" field
    """
    if not value or not value.strip():
        return ValidationResult.invalid('email', "The email address is empty.")
    if '\r' in value or '\n' in value:
        return ValidationResult.invalid('email', "The email address contains a line break.")

    try:
        email_validator.validate_email(
            value,
            check_deliverability=False,
            allow_display_name=True
        )
    except EmailNotValidError as e:
        return ValidationResult.invalid('email', str(e))

    return ValidationResult.ok('email')


def validate_subject(value: str) -> ValidationResult:
    if _length(value) > MAX_SUBJECT_LENGTH:
        return ValidationResult.invalid(
            'subject', f"email subject is more than {MAX_SUBJECT_LENGTH} characters"
        )
    return ValidationResult.ok('subject')


def validate_message(value: str) -> ValidationResult:
    if _length(value) > MAX_MESSAGE_LENGTH:
        return ValidationResult.invalid(
            'message', f"email message is more than {MAX_MESSAGE_LENGTH} characters"
        )
    return ValidationResult.ok('message')


def validate_app_version(value: str) -> ValidationResult:
    """Check the client tag against the app version grammar."""
    try:
        parse_app_version(value)
    except InvalidAppVersionError as e:
        return ValidationResult.invalid('app', str(e))
    return ValidationResult.ok('app')


VALIDATORS: Dict[str, Callable[[str], ValidationResult]] = {
    'email': validate_email,
    'subject': validate_subject,
    'message': validate_message,
    'app': validate_app_version,
}


def validate(kind: str, value: str) -> ValidationResult:
    """
    Validate value with the rule registered for kind.

    Args:
        kind: One of "email", "subject", "message", "app"
        value: Field value to check

    Returns:
        ValidationResult for that field

    Raises:
        UnknownFieldError: If no validator exists for kind (caller bug)
    """
    try:
        validator = VALIDATORS[kind]
    except KeyError:
        logger.error(f"No validator registered for field kind: {kind}")
        raise UnknownFieldError(f"unknown field {kind}") from None

    return validator(value)
