"""Email address validation for the summary delivery form"""

import re

from credit_approver.domain.models import EmailCheck

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")

VALID_MESSAGE = "Email looks good!"
EMPTY_MESSAGE = "Email cannot be empty."
MALFORMED_MESSAGE = "Please enter a valid email address."
NOT_TEXT_MESSAGE = "Email input must be text."


def validate_email(candidate: object) -> EmailCheck:
    """
    Check that an address has the shape local@domain.tld with no whitespace.

    Never raises: every input maps to an EmailCheck whose message tells the
    user which kind of problem was found.
    """
    if not isinstance(candidate, str):
        return EmailCheck(ok=False, message=NOT_TEXT_MESSAGE)
    if not candidate.strip():
        return EmailCheck(ok=False, message=EMPTY_MESSAGE)
    if EMAIL_PATTERN.fullmatch(candidate):
        return EmailCheck(ok=True, message=VALID_MESSAGE)
    return EmailCheck(ok=False, message=MALFORMED_MESSAGE)
