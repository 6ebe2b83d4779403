from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from convoforms.domain.entities import WorkspaceInvitation


class IInvitationRepository(ABC):
    """WorkspaceInvitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[WorkspaceInvitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[WorkspaceInvitation]:
        """Get invitation by the SHA-256 hash of its token"""
        pass

    @abstractmethod
    async def get_pending_by_workspace_and_email(
        self, workspace_id: UUID, email: str
    ) -> Optional[WorkspaceInvitation]:
        """Get pending invitation by workspace and email"""
        pass

    @abstractmethod
    async def list_by_workspace(self, workspace_id: UUID) -> List[WorkspaceInvitation]:
        """Get all invitations for a workspace, oldest first"""
        pass

    @abstractmethod
    async def create(self, invitation: WorkspaceInvitation) -> WorkspaceInvitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: WorkspaceInvitation) -> WorkspaceInvitation:
        """Update existing invitation"""
        pass
