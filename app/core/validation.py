import re

from app.core.exceptions import InvalidEmailFormat, MissingField
from app.models.contact import ContactSubmission

REQUIRED_FIELDS = ("name", "email", "message")

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def validate_submission(submission: ContactSubmission) -> ContactSubmission:
    """
    Check a contact submission before anything is built from it.

    Presence is checked first: every field must be present and non-blank
    after trimming. The email is then matched, untrimmed, against
    `local@domain.tld` where each part is one or more characters that are
    neither whitespace nor "@".

    The email check is structural only. It accepts many addresses that
    RFC 5322 forbids (e.g. "a..b@c.d") and rejects a few it allows
    (quoted local parts containing spaces, dotless domains such as
    "user@localhost").

    Raises:
        MissingField: a field is absent or blank
        InvalidEmailFormat: the email does not have the expected shape
    """
    for field in REQUIRED_FIELDS:
        value = getattr(submission, field)
        if value is None or not value.strip():
            raise MissingField(field)

    if not EMAIL_PATTERN.fullmatch(submission.email):
        raise InvalidEmailFormat()

    return submission
