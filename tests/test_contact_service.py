import asyncio

import pytest

from app.core.contact_service import relay_contact_submission
from app.core.exceptions import DispatchError, InvalidEmailFormat, MissingField
from app.models.contact import ContactSubmission

from conftest import FakeDispatcher


def relay(submission, settings, dispatcher):
    return asyncio.run(relay_contact_submission(submission, settings, dispatcher))


@pytest.fixture
def submission():
    return ContactSubmission(name="Jane Doe", email="jane@example.com", message="Hello <there>")


def test_sends_both_messages(submission, settings):
    dispatcher = FakeDispatcher()

    response = relay(submission, settings, dispatcher)

    assert response.message == "Message sent successfully"
    assert [message.kind for message in dispatcher.sent] == ["notification", "auto_reply"]


@pytest.mark.parametrize("failing", [{"notification"}, {"auto_reply"}, {"notification", "auto_reply"}])
def test_any_failed_send_fails_the_submission(submission, settings, failing):
    dispatcher = FakeDispatcher(fail_kinds=failing)

    with pytest.raises(DispatchError) as excinfo:
        relay(submission, settings, dispatcher)

    # Both sends are attempted even when one fails
    assert len(dispatcher.sent) == 2
    failed = {outcome.message.kind for outcome in excinfo.value.outcomes if not outcome.success}
    assert failed == failing


def test_sends_run_concurrently(submission, settings):
    class SlowDispatcher(FakeDispatcher):
        def __init__(self):
            super().__init__()
            self.in_flight = 0
            self.max_in_flight = 0

        async def send(self, message):
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            await asyncio.sleep(0.01)
            self.in_flight -= 1
            return await super().send(message)

    dispatcher = SlowDispatcher()
    relay(submission, settings, dispatcher)
    assert dispatcher.max_in_flight == 2


def test_invalid_submission_sends_nothing(settings):
    dispatcher = FakeDispatcher()

    with pytest.raises(MissingField):
        relay(ContactSubmission(name="Jane", email="jane@example.com", message="   "), settings, dispatcher)
    with pytest.raises(InvalidEmailFormat):
        relay(ContactSubmission(name="Jane", email="a@b", message="Hi"), settings, dispatcher)

    assert dispatcher.sent == []
