from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from convoforms.domain.entities import Form, FormTemplate


class IFormRepository(ABC):
    """Form repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, form_id: UUID) -> Optional[Form]:
        """Get form by ID"""
        pass

    @abstractmethod
    async def list_by_workspace(self, workspace_id: UUID) -> List[Form]:
        """Get all forms of a workspace, newest first"""
        pass

    @abstractmethod
    async def create(self, form: Form) -> Form:
        """Create a new form"""
        pass

    @abstractmethod
    async def update(self, form: Form) -> Form:
        """Update existing form"""
        pass

    @abstractmethod
    async def delete(self, form: Form) -> None:
        """Delete a form"""
        pass

    @abstractmethod
    async def link_template(self, link: FormTemplate) -> FormTemplate:
        """Record the template a form was created from"""
        pass
