"""
Contact form endpoint.

Errors raised by the service layer (validation, dispatch) are turned into
JSON responses by the exception handlers registered in app.main.
"""

from fastapi import APIRouter, Depends, Request, status

from app.core.config import Settings, get_settings
from app.core.contact_service import relay_contact_submission
from app.core.mailer import MailDispatcher
from app.models.contact import ContactResponse, ContactSubmission, ErrorResponse

router = APIRouter()


def get_mail_dispatcher(request: Request) -> MailDispatcher:
    """Returns the dispatcher created at startup"""
    return request.app.state.mail_dispatcher


@router.post(
    "/contact",
    status_code=status.HTTP_200_OK,
    response_model=ContactResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_contact(
    submission: ContactSubmission,
    settings: Settings = Depends(get_settings),
    dispatcher: MailDispatcher = Depends(get_mail_dispatcher),
):
    """
    Relay a contact form submission to the site owner and send the
    sender an auto-reply.

    Returns:
        dict: {"message": "Message sent successfully"}
    """
    return await relay_contact_submission(submission, settings, dispatcher)
