"""
Exception hierarchy for the contact relay service.

Every failure is converted to an HTTP status and JSON body by the handlers
registered in app.main; none of these messages carry transport details
except ConfigurationError, which only ever reaches the operator.
"""

from typing import List, Optional, Sequence


class ContactRelayError(Exception):
    """Base exception for the service"""


class ConfigurationError(ContactRelayError):
    """Required startup configuration is missing"""

    def __init__(self, missing: Sequence[str]):
        self.missing: List[str] = list(missing)
        super().__init__(
            "Missing required environment variable(s): " + ", ".join(self.missing)
        )


class ContactValidationError(ContactRelayError):
    """A submission was rejected; `reason` is safe to show to the caller"""

    reason = "Invalid submission"

    def __init__(self, reason: Optional[str] = None):
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)


class MissingField(ContactValidationError):
    reason = "All fields are required"

    def __init__(self, field: Optional[str] = None):
        self.field = field
        super().__init__()


class InvalidEmailFormat(ContactValidationError):
    reason = "Invalid email format"


class DispatchError(ContactRelayError):
    """At least one outbound message could not be delivered"""

    public_message = "Failed to send message. Please try again later."

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        failed = [outcome for outcome in self.outcomes if not outcome.success]
        super().__init__(f"{len(failed)} of {len(self.outcomes)} message(s) failed to send")
