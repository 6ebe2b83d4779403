from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from convoforms.domain.entities import Template


class ITemplateRepository(ABC):
    """Template repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, template_id: UUID) -> Optional[Template]:
        """Get template by ID"""
        pass

    @abstractmethod
    async def list_visible(
        self,
        workspace_id: UUID,
        is_global: Optional[bool] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Template], int]:
        """
        Get global templates and templates of the workspace.

        Returns:
            Tuple of (templates page, total matching)
        """
        pass

    @abstractmethod
    async def create(self, template: Template) -> Template:
        """Create a new template"""
        pass

    @abstractmethod
    async def update(self, template: Template) -> Template:
        """Update existing template"""
        pass

    @abstractmethod
    async def delete(self, template: Template) -> None:
        """Delete a template"""
        pass
