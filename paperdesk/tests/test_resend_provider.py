"""ResendProvider against a mocked HTTP transport."""
import json

import httpx
import pytest

from paperdesk.features.notifications.provider import EmailMessage, EmailProviderError
from paperdesk.features.notifications.resend_provider import ResendProvider

MESSAGE = EmailMessage(sender="papers@example.com", to="a@uni.edu", subject="Hi", text="Hello")


def _provider(handler):
    return ResendProvider("re_test_123", transport=httpx.MockTransport(handler))


def test_posts_batch_with_bearer_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": [{"id": "email_1"}]})

    response = _provider(handler).send_batch([MESSAGE])

    assert response == {"data": [{"id": "email_1"}]}
    assert seen["url"] == "https://api.resend.com/emails/batch"
    assert seen["auth"] == "Bearer re_test_123"
    assert seen["body"] == [{"from": "papers@example.com", "to": ["a@uni.edu"], "subject": "Hi", "text": "Hello"}]


def test_custom_api_base():
    urls = []

    def handler(request):
        urls.append(str(request.url))
        return httpx.Response(200, json={"data": []})

    ResendProvider("re_x", api_base="http://resend.local/", transport=httpx.MockTransport(handler)).send_batch([MESSAGE])
    assert urls == ["http://resend.local/emails/batch"]


def test_rejected_batch_raises_with_provider_message():
    def handler(request):
        return httpx.Response(422, json={"statusCode": 422, "message": "Invalid `from` field", "name": "validation_error"})

    with pytest.raises(EmailProviderError, match="422 Invalid `from` field"):
        _provider(handler).send_batch([MESSAGE])


def test_network_failure_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EmailProviderError, match="Resend request failed"):
        _provider(handler).send_batch([MESSAGE])


def test_missing_api_key():
    with pytest.raises(EmailProviderError):
        ResendProvider(None)
