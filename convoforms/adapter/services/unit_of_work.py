from sqlmodel.ext.asyncio.session import AsyncSession

from convoforms.adapter.repositories.form_repository import FormRepository
from convoforms.adapter.repositories.invitation_repository import InvitationRepository
from convoforms.adapter.repositories.subscription_repository import SubscriptionRepository
from convoforms.adapter.repositories.template_repository import TemplateRepository
from convoforms.adapter.repositories.user_repository import UserRepository
from convoforms.adapter.repositories.workspace_activity_repository import (
    WorkspaceActivityRepository,
)
from convoforms.adapter.repositories.workspace_member_repository import (
    WorkspaceMemberRepository,
)
from convoforms.adapter.repositories.workspace_repository import WorkspaceRepository
from convoforms.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.workspaces = WorkspaceRepository(self.session)
        self.members = WorkspaceMemberRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.subscriptions = SubscriptionRepository(self.session)
        self.activities = WorkspaceActivityRepository(self.session)
        self.forms = FormRepository(self.session)
        self.templates = TemplateRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
