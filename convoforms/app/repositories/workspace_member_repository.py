from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from convoforms.domain.entities import User, WorkspaceMember


class IWorkspaceMemberRepository(ABC):
    """WorkspaceMember repository interface - application layer"""

    @abstractmethod
    async def get(self, workspace_id: UUID, user_id: str) -> Optional[WorkspaceMember]:
        """Get membership by workspace and user"""
        pass

    @abstractmethod
    async def list_with_users(
        self, workspace_id: UUID
    ) -> List[Tuple[WorkspaceMember, User]]:
        """Get all members of a workspace joined with their user profile"""
        pass

    @abstractmethod
    async def count_by_workspace(self, workspace_id: UUID) -> int:
        """Count members of a workspace"""
        pass

    @abstractmethod
    async def create(self, member: WorkspaceMember) -> WorkspaceMember:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, member: WorkspaceMember) -> WorkspaceMember:
        """Update existing membership"""
        pass

    @abstractmethod
    async def delete(self, member: WorkspaceMember) -> None:
        """Delete a membership"""
        pass
