from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from convoforms.domain.entities import Workspace, WorkspaceRole


class IWorkspaceRepository(ABC):
    """Workspace repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, workspace_id: UUID) -> Optional[Workspace]:
        """Get workspace by ID"""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Workspace]:
        """Get workspace by slug"""
        pass

    @abstractmethod
    async def get_default_for_owner(self, owner_id: str) -> Optional[Workspace]:
        """Get the default workspace owned by a user"""
        pass

    @abstractmethod
    async def count_by_owner(self, owner_id: str) -> int:
        """Count workspaces owned by a user"""
        pass

    @abstractmethod
    async def list_for_member(
        self, user_id: str
    ) -> List[Tuple[Workspace, WorkspaceRole]]:
        """Get workspaces the user belongs to, with the user's role in each"""
        pass

    @abstractmethod
    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        pass

    @abstractmethod
    async def update(self, workspace: Workspace) -> Workspace:
        """Update existing workspace"""
        pass
