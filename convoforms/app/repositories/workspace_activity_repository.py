from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from convoforms.domain.entities import WorkspaceActivity


class IWorkspaceActivityRepository(ABC):
    """WorkspaceActivity repository interface - application layer"""

    @abstractmethod
    async def create(self, activity: WorkspaceActivity) -> WorkspaceActivity:
        """Create a new activity (immutable)"""
        pass

    @abstractmethod
    async def get_by_workspace_paginated(
        self, workspace_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[WorkspaceActivity], Optional[str]]:
        """
        Get activities for a workspace with cursor-based pagination.

        Returns:
            Tuple of (activities, next_cursor)
        """
        pass
