"""
Builds the two outbound emails for a validated contact submission.
"""

from typing import Tuple

from app.core.config import Settings
from app.core.sanitize import sanitize_html
from app.models.contact import ContactSubmission, OutboundMessage

NOTIFICATION_SUBJECT = "Portfolio Contact: {name}"
AUTO_REPLY_SUBJECT = "Thank you for your message"

NOTIFICATION_TEMPLATE = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #0891b2;">New Portfolio Contact Message</h2>
  <div style="border-left: 4px solid #0891b2; padding-left: 15px; margin: 20px 0;">
    <p><strong>From:</strong> {name}</p>
    <p><strong>Email:</strong> {email}</p>
    <p><strong>Message:</strong></p>
    <p style="white-space: pre-wrap;">{message}</p>
  </div>
  <div style="margin-top: 20px; font-size: 12px; color: #666;">
    <p>This message was sent from your portfolio contact form.</p>
  </div>
</div>
"""

AUTO_REPLY_TEMPLATE = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #0891b2;">Thank You for Contacting Me</h2>
  <p>Dear {name},</p>
  <p>Thank you for reaching out through my portfolio. I have received your message and will get back to you as soon as possible at this email address.</p>
  <div style="border-left: 4px solid #0891b2; padding-left: 15px; margin: 20px 0;">
    <p><strong>Your message:</strong></p>
    <p style="white-space: pre-wrap;">{message}</p>
  </div>
  <p>Best regards,<br>{signature}</p>
  <div style="margin-top: 20px; font-size: 12px; color: #666;">
    <p>This is an automated response. Please do not reply to this email.</p>
  </div>
</div>
"""


def compose_messages(
    submission: ContactSubmission, settings: Settings
) -> Tuple[OutboundMessage, OutboundMessage]:
    """
    Build the notification and the auto-reply for a validated submission.

    User text is escaped here, once. The raw email address is only used as
    the auto-reply envelope recipient.

    Returns:
        tuple: (notification, auto_reply)
    """
    name = sanitize_html(submission.name)
    email = sanitize_html(submission.email)
    message = sanitize_html(submission.message)

    notification = OutboundMessage(
        kind="notification",
        from_address=settings.email_user,
        to=settings.receiver_email,
        # Header values cannot carry line breaks
        subject=NOTIFICATION_SUBJECT.format(name=" ".join(name.split())),
        html_body=NOTIFICATION_TEMPLATE.format(name=name, email=email, message=message),
    )

    auto_reply = OutboundMessage(
        kind="auto_reply",
        from_address=settings.email_user,
        to=submission.email,
        subject=AUTO_REPLY_SUBJECT,
        html_body=AUTO_REPLY_TEMPLATE.format(
            name=name,
            message=message,
            signature=sanitize_html(settings.signature_name),
        ),
    )

    return notification, auto_reply
