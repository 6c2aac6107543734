"""Tests for co-author invitation emails (service + /send-email)."""
import logging

import pytest

from paperdesk.core.errors import ValidationError
from paperdesk.features.notifications.service import (
    INVITATION_SUBJECT,
    InvitationEmail,
    build_invitation_messages,
    send_invitation_emails,
)
from paperdesk.tests.fakes import FakeEmailProvider


def _invitation(email="coauthor@uni.edu", **overrides):
    values = dict(email=email, invitedBy="Dr. Smith", paper="On Graphs", contributions="data analysis")
    values.update(overrides)
    return values


def test_message_text_names_inviter_paper_and_link():
    messages = build_invitation_messages(
        [InvitationEmail(**_invitation())],
        sender="papers@example.com",
        status_url="https://app.example.com/status",
    )
    assert len(messages) == 1
    message = messages[0]
    assert message.sender == "papers@example.com"
    assert message.to == "coauthor@uni.edu"
    assert message.subject == INVITATION_SUBJECT == "Research Paper Invitation"
    assert message.text == (
        'Dr. Smith added you as a co-author of the work "On Graphs" '
        "with the following contribution: data analysis. "
        "If you want to check the status of the publication, please follow this link https://app.example.com/status"
    )


def test_message_payload_uses_provider_field_names():
    message = build_invitation_messages([InvitationEmail(**_invitation())], "from@x.com", "https://s")[0]
    assert message.to_payload() == {
        "from": "from@x.com",
        "to": ["coauthor@uni.edu"],
        "subject": "Research Paper Invitation",
        "text": message.text,
    }


def test_whole_list_goes_out_in_one_batch():
    provider = FakeEmailProvider()
    invitations = [InvitationEmail(**_invitation(f"user{i}@uni.edu")) for i in range(3)]

    count = send_invitation_emails(provider, invitations, sender="a@b.com", status_url="https://s")

    assert count == 3
    assert len(provider.batches) == 1
    assert [m.to for m in provider.batches[0]] == ["user0@uni.edu", "user1@uni.edu", "user2@uni.edu"]


def test_empty_list_is_rejected_without_provider_call():
    provider = FakeEmailProvider()
    with pytest.raises(ValidationError, match="Please provide list of emails"):
        send_invitation_emails(provider, [], sender="a@b.com", status_url="https://s")
    assert provider.batches == []


def test_oversized_list_is_rejected():
    provider = FakeEmailProvider()
    invitations = [InvitationEmail(**_invitation(f"user{i}@uni.edu")) for i in range(101)]
    with pytest.raises(ValidationError):
        send_invitation_emails(provider, invitations, sender="a@b.com", status_url="https://s")
    assert provider.batches == []


def test_send_email_endpoint(client, fake_email):
    resp = client.post("/send-email", json={"emailObjects": [_invitation(), _invitation("b@uni.edu")]})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Emails has been sent"}

    batch = fake_email.batches[0]
    assert [m.to for m in batch] == ["coauthor@uni.edu", "b@uni.edu"]
    assert all(m.sender == "papers@example.com" for m in batch)
    # Without PUBLICATION_STATUS_URL the link falls back to the front-end
    assert batch[0].text.endswith("please follow this link https://app.example.com")


@pytest.mark.parametrize("body", [{}, {"emailObjects": []}, {"emailObjects": None}])
def test_send_email_requires_non_empty_list(client, fake_email, body):
    resp = client.post("/send-email", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Please provide list of emails to send email to"
    assert fake_email.batches == []


def test_send_email_rejects_incomplete_entries(client, fake_email):
    resp = client.post("/send-email", json={"emailObjects": [{"email": "a@b.com"}]})
    assert resp.status_code == 400
    assert fake_email.batches == []


def test_send_email_provider_failure_is_500(client, fake_email):
    fake_email.fail = True
    resp = client.post("/send-email", json={"emailObjects": [_invitation()]})
    assert resp.status_code == 500
    assert resp.json()["error"]["message"] == "Failed to send emails"


class _VerboseEmailProvider:
    def send_batch(self, messages):
        return {"data": [{"id": "e" * 40} for _ in range(50)]}


def test_batch_response_is_logged_truncated(caplog):
    with caplog.at_level(logging.INFO, logger="paperdesk"):
        send_invitation_emails(
            _VerboseEmailProvider(),
            [InvitationEmail(**_invitation())],
            sender="a@b.com",
            status_url="https://s",
        )

    record = [r for r in caplog.records if r.getMessage() == "email.batch_sent"][-1]
    assert record.count == "1"
    assert record.provider_response.endswith("...<truncated>")
