"""
Resend email sender.

Posts to the Resend REST API with httpx. Delivery problems are returned
as a failed EmailResult, never raised.
"""

import logging
from html import escape
from typing import Optional

import httpx

from convoforms.app.services.email_sender import (
    EmailResult,
    IEmailSender,
    InvitationEmail,
    WelcomeEmail,
)

logger = logging.getLogger(__name__)

ROLE_DESCRIPTIONS = {
    "admin": "manage workspace settings, members, and all forms",
    "member": "create, edit, and manage forms and responses",
    "viewer": "view forms and responses",
}


class ResendEmailSender(IEmailSender):
    def __init__(
        self,
        api_key: Optional[str],
        from_email: str,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def send_email(self, to: str, subject: str, html: str, text: str) -> EmailResult:
        if not self.api_key:
            logger.warning("RESEND_API_KEY not configured, email will not be sent")
            return EmailResult(success=False, error="Email service not configured")

        payload = {
            "from": self.from_email,
            "to": [to],
            "subject": subject,
            "html": html,
            "text": text,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                f"Resend rejected email '{subject}' with status {exc.response.status_code}"
            )
            return EmailResult(
                success=False, error=f"Email provider returned {exc.response.status_code}"
            )
        except httpx.HTTPError as exc:
            logger.error(f"Failed to send email '{subject}': {exc}")
            return EmailResult(success=False, error=str(exc) or "Email transport error")

        email_id = _message_id(response)
        logger.info(f"Email sent: subject='{subject}' id={email_id}")
        return EmailResult(success=True, id=email_id)

    async def send_invitation_email(self, email: InvitationEmail) -> EmailResult:
        subject = f"You're invited to join {email.workspace_name} on ConvoForms"
        return await self.send_email(
            email.invitee_email,
            subject,
            render_invitation_html(email),
            render_invitation_text(email),
        )

    async def send_welcome_email(self, email: WelcomeEmail) -> EmailResult:
        subject = f"Welcome to {email.workspace_name}!"
        return await self.send_email(
            email.to,
            subject,
            render_welcome_html(email),
            render_welcome_text(email),
        )


def _message_id(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        logger.warning("Resend accepted the email but returned a non-JSON body")
        return None
    return body.get("id") if isinstance(body, dict) else None


def render_invitation_text(email: InvitationEmail) -> str:
    lines = [
        f"You're invited to join {email.workspace_name} on ConvoForms!",
        "",
        f"{email.inviter_name} has invited you to collaborate on {email.workspace_name}.",
    ]
    if email.workspace_description:
        lines.append(f"About this workspace: {email.workspace_description}")
    lines += [
        "",
        f"Your role: {email.role.capitalize()}",
        f"Accept your invitation: {email.invitation_url}",
        "",
        f"This invitation expires on {email.expires_at:%Y-%m-%d}.",
        "If you didn't expect this invitation, you can safely ignore this email.",
    ]
    return "\n".join(lines)


def render_invitation_html(email: InvitationEmail) -> str:
    description = ""
    if email.workspace_description:
        description = f"<p>{escape(email.workspace_description)}</p>"
    url = escape(email.invitation_url, quote=True)
    role_description = ROLE_DESCRIPTIONS.get(email.role, "")
    return (
        "<!DOCTYPE html><html><body>"
        "<h1>You're Invited!</h1>"
        f"<p><strong>{escape(email.inviter_name)}</strong> has invited you to collaborate on "
        f"<strong>{escape(email.workspace_name)}</strong>.</p>"
        f"{description}"
        f"<p>Your role: <strong>{escape(email.role.capitalize())}</strong>. "
        f"As a {escape(email.role)}, you can {role_description}.</p>"
        f'<p><a href="{url}">Accept Invitation</a></p>'
        f"<p>This invitation expires on {email.expires_at:%Y-%m-%d}.</p>"
        f'<p>Or paste this link into your browser: <a href="{url}">{url}</a></p>'
        "<p>If you didn't expect this invitation, you can safely ignore this email.</p>"
        "</body></html>"
    )


def render_welcome_text(email: WelcomeEmail) -> str:
    return "\n".join(
        [
            f"Hi {email.user_name}!",
            "",
            f"Welcome to {email.workspace_name}! We're excited to have you as part of the team.",
            f"Go to your workspace: {email.workspace_url}",
        ]
    )


def render_welcome_html(email: WelcomeEmail) -> str:
    url = escape(email.workspace_url, quote=True)
    return (
        "<!DOCTYPE html><html><body>"
        "<h1>Welcome to the team!</h1>"
        f"<p>Hi {escape(email.user_name)}!</p>"
        f"<p>Welcome to <strong>{escape(email.workspace_name)}</strong>! "
        "We're excited to have you as part of the team.</p>"
        f'<p><a href="{url}">Go to Workspace</a></p>'
        "</body></html>"
    )
