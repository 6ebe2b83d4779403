from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class EmailResult:
    success: bool
    id: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class InvitationEmail:
    invitee_email: str
    inviter_name: str
    workspace_name: str
    role: str
    invitation_url: str
    expires_at: datetime
    workspace_description: Optional[str] = None


@dataclass(frozen=True)
class WelcomeEmail:
    to: str
    user_name: str
    workspace_name: str
    workspace_url: str


class IEmailSender(ABC):
    """Transactional email interface - application layer"""

    @abstractmethod
    async def send_invitation_email(self, email: InvitationEmail) -> EmailResult:
        """Send a workspace invitation. Must not raise for delivery failures."""
        pass

    @abstractmethod
    async def send_welcome_email(self, email: WelcomeEmail) -> EmailResult:
        """Send a welcome message to a new member. Must not raise for delivery failures."""
        pass
