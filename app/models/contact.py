from pydantic import BaseModel, ConfigDict
from typing import Optional


class ContactSubmission(BaseModel):
    # Presence is checked by app.core.validation so a missing field
    # is reported as "All fields are required" instead of a schema error
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None


class OutboundMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str  # "notification" | "auto_reply"
    from_address: str
    to: str
    subject: str
    html_body: str


class DispatchOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: OutboundMessage
    success: bool
    error: Optional[str] = None


class ContactResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
