"""
Request handling for contact form submissions.

Validate, compose (which sanitizes), send the notification and the auto-reply
concurrently, then report. Success is all-or-nothing: if either send fails
the whole submission is reported as failed, even though the other email may
already have been delivered.
"""

import asyncio
import logging

from app.core.composer import compose_messages
from app.core.config import Settings
from app.core.exceptions import DispatchError
from app.core.mailer import MailDispatcher
from app.core.validation import validate_submission
from app.models.contact import ContactResponse, ContactSubmission

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent successfully"


async def relay_contact_submission(
    submission: ContactSubmission,
    settings: Settings,
    dispatcher: MailDispatcher,
) -> ContactResponse:
    """
    Relay one contact submission as two emails.

    Raises:
        ContactValidationError: the submission is incomplete or malformed;
            nothing has been sent
        DispatchError: at least one of the two emails failed
    """
    validate_submission(submission)
    logger.debug(f"Accepted contact submission from {submission.name} <{submission.email}>")

    notification, auto_reply = compose_messages(submission, settings)

    # Join, not race: both sends settle before the outcome is decided
    outcomes = await asyncio.gather(
        dispatcher.send(notification),
        dispatcher.send(auto_reply),
    )

    for outcome in outcomes:
        status = "sent" if outcome.success else f"failed ({outcome.error})"
        logger.info(f"Contact {outcome.message.kind} email {status}")

    if not all(outcome.success for outcome in outcomes):
        raise DispatchError(outcomes)

    return ContactResponse(message=SUCCESS_MESSAGE)
