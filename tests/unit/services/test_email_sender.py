import json
from datetime import datetime

import httpx
import pytest

from convoforms.adapter.services.email_sender import ResendEmailSender
from convoforms.app.services.email_sender import InvitationEmail, WelcomeEmail

INVITATION = InvitationEmail(
    invitee_email="new@acme.io",
    inviter_name="Jane Smith",
    workspace_name="Acme <Forms>",
    role="member",
    invitation_url="http://localhost:3002/invite?token=abc",
    expires_at=datetime(2030, 1, 8),
    workspace_description="Customer surveys",
)


def sender_with(handler, api_key="re_test"):
    return ResendEmailSender(
        api_key=api_key,
        from_email="ConvoForms <noreply@convo.ai>",
        api_url="https://resend.test/emails",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_missing_api_key_is_a_failed_result():
    def handler(request):
        raise AssertionError("no request expected")

    result = await sender_with(handler, api_key=None).send_invitation_email(INVITATION)

    assert not result.success
    assert result.error == "Email service not configured"


@pytest.mark.asyncio
async def test_invitation_email_is_posted():
    captured = {}

    def handler(request: httpx.Request):
        captured["auth"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email_123"})

    result = await sender_with(handler).send_invitation_email(INVITATION)

    assert result.success
    assert result.id == "email_123"
    assert captured["auth"] == "Bearer re_test"
    body = captured["body"]
    assert body["to"] == ["new@acme.io"]
    assert body["subject"] == "You're invited to join Acme <Forms> on ConvoForms"
    assert "http://localhost:3002/invite?token=abc" in body["text"]
    assert "Acme &lt;Forms&gt;" in body["html"]


@pytest.mark.asyncio
async def test_provider_error_is_a_failed_result():
    result = await sender_with(lambda request: httpx.Response(422)).send_welcome_email(
        WelcomeEmail(
            to="new@acme.io",
            user_name="New",
            workspace_name="Acme",
            workspace_url="http://localhost:3002/acme",
        )
    )

    assert not result.success
    assert result.error == "Email provider returned 422"


@pytest.mark.asyncio
async def test_transport_error_is_a_failed_result():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await sender_with(handler).send_invitation_email(INVITATION)

    assert not result.success
    assert "connection refused" in result.error


@pytest.mark.asyncio
async def test_accepted_email_without_json_body_is_still_a_success():
    result = await sender_with(lambda request: httpx.Response(200, text="OK")).send_welcome_email(
        WelcomeEmail(
            to="new@acme.io",
            user_name="New",
            workspace_name="Acme",
            workspace_url="http://localhost:3002/acme",
        )
    )

    assert result.success
    assert result.id is None
