from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from convoforms.app.repositories.workspace_member_repository import (
    IWorkspaceMemberRepository,
)
from convoforms.domain.entities import User, WorkspaceMember


class WorkspaceMemberRepository(IWorkspaceMemberRepository):
    """WorkspaceMember repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, workspace_id: UUID, user_id: str) -> Optional[WorkspaceMember]:
        """Get membership by workspace and user"""
        stmt = select(WorkspaceMember).where(
            WorkspaceMember.workspace_id == workspace_id,
            WorkspaceMember.user_id == user_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_with_users(
        self, workspace_id: UUID
    ) -> List[Tuple[WorkspaceMember, User]]:
        stmt = (
            select(WorkspaceMember, User)
            .join(User, User.id == WorkspaceMember.user_id)
            .where(WorkspaceMember.workspace_id == workspace_id)
            .order_by(WorkspaceMember.created_at)
        )
        result = await self.session.exec(stmt)
        return [(member, user) for member, user in result.all()]

    async def count_by_workspace(self, workspace_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(WorkspaceMember)
            .where(WorkspaceMember.workspace_id == workspace_id)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, member: WorkspaceMember) -> WorkspaceMember:
        """Create a new membership"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def update(self, member: WorkspaceMember) -> WorkspaceMember:
        """Update existing membership"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def delete(self, member: WorkspaceMember) -> None:
        """Delete a membership"""
        await self.session.delete(member)
        await self.session.flush()
