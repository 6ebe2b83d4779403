from abc import ABC, abstractmethod

from convoforms.app.repositories.form_repository import IFormRepository
from convoforms.app.repositories.invitation_repository import IInvitationRepository
from convoforms.app.repositories.subscription_repository import ISubscriptionRepository
from convoforms.app.repositories.template_repository import ITemplateRepository
from convoforms.app.repositories.user_repository import IUserRepository
from convoforms.app.repositories.workspace_activity_repository import (
    IWorkspaceActivityRepository,
)
from convoforms.app.repositories.workspace_member_repository import (
    IWorkspaceMemberRepository,
)
from convoforms.app.repositories.workspace_repository import IWorkspaceRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    workspaces: IWorkspaceRepository
    members: IWorkspaceMemberRepository
    invitations: IInvitationRepository
    subscriptions: ISubscriptionRepository
    activities: IWorkspaceActivityRepository
    forms: IFormRepository
    templates: ITemplateRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
