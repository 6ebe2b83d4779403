from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from convoforms.app.repositories.invitation_repository import IInvitationRepository
from convoforms.domain.entities import InvitationStatus, WorkspaceInvitation


class InvitationRepository(IInvitationRepository):
    """WorkspaceInvitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[WorkspaceInvitation]:
        """Get invitation by ID"""
        stmt = select(WorkspaceInvitation).where(WorkspaceInvitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[WorkspaceInvitation]:
        stmt = select(WorkspaceInvitation).where(
            WorkspaceInvitation.token_hash == token_hash
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_workspace_and_email(
        self, workspace_id: UUID, email: str
    ) -> Optional[WorkspaceInvitation]:
        """Get pending invitation by workspace and email"""
        stmt = select(WorkspaceInvitation).where(
            WorkspaceInvitation.workspace_id == workspace_id,
            WorkspaceInvitation.email == email,
            WorkspaceInvitation.status == InvitationStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_workspace(self, workspace_id: UUID) -> List[WorkspaceInvitation]:
        stmt = (
            select(WorkspaceInvitation)
            .where(WorkspaceInvitation.workspace_id == workspace_id)
            .order_by(WorkspaceInvitation.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invitation: WorkspaceInvitation) -> WorkspaceInvitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: WorkspaceInvitation) -> WorkspaceInvitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation
