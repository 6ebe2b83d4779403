"""
Onboard Use Case

First-login provisioning: local user, starter subscription and a
default workspace derived from the user's email.
"""

import copy
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.identity import CurrentUser, ensure_user
from convoforms.app.services.quota import create_default_subscription
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import (
    DEFAULT_WORKSPACE_SETTINGS,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
    WorkspaceType,
)
from convoforms.domain.slugs import (
    base_slug_from_email,
    default_workspace_name,
    fallback_slug,
    numbered_slug_candidates,
)
from convoforms.libs.result import Error, Result, Return

from .dtos import OnboardResponse

logger = logging.getLogger(__name__)

DEFAULT_WORKSPACE_DESCRIPTION = "Your default workspace for creating conversational forms"


class OnboardUseCase:
    """
    Use case for automatic onboarding.

    Business Rules:
    - Idempotent: a user with a default workspace is sent back to it
    - User row, subscription and default workspace commit together
    - Slug: email local part, domain appended to generic terms,
      then -2 .. -10, then a random 6-character suffix
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(self, identity: CurrentUser) -> Result[OnboardResponse]:
        async with self.uow:
            user = await ensure_user(self.uow, identity)
            if user is None:
                return Return.err(Error("EMAIL_REQUIRED", "User email not found"))

            await create_default_subscription(self.uow, user.id)

            existing = await self.uow.workspaces.get_default_for_owner(user.id)
            if existing:
                await self.uow.commit()
                return Return.ok(
                    OnboardResponse(
                        workspace_slug=existing.slug,
                        workspace_name=existing.name,
                        is_new_workspace=False,
                    )
                )

            slug = await self._available_slug(user.email)
            try:
                workspace = await self.uow.workspaces.create(
                    Workspace(
                        name=default_workspace_name(user.email, user.first_name),
                        slug=slug,
                        type=WorkspaceType.default,
                        owner_id=user.id,
                        description=DEFAULT_WORKSPACE_DESCRIPTION,
                        settings=copy.deepcopy(DEFAULT_WORKSPACE_SETTINGS),
                    )
                )
                await self.uow.members.create(
                    WorkspaceMember(
                        workspace_id=workspace.id,
                        user_id=user.id,
                        role=WorkspaceRole.owner,
                        joined_at=utc_now(),
                    )
                )
                await self.uow.commit()
            except IntegrityError:
                # Lost a race with a concurrent onboarding of the same user
                await self.uow.rollback()
                existing = await self.uow.workspaces.get_default_for_owner(user.id)
                if existing is None:
                    return Return.err(
                        Error("SLUG_TAKEN", "Could not reserve a workspace URL, try again")
                    )
                return Return.ok(
                    OnboardResponse(
                        workspace_slug=existing.slug,
                        workspace_name=existing.name,
                        is_new_workspace=False,
                    )
                )

            logger.info(f"Default workspace {workspace.slug} created for user {user.id}")

            await self.activity_logger.workspace_created(
                workspace.id,
                user.id,
                {
                    "workspace_name": workspace.name,
                    "workspace_type": WorkspaceType.default.value,
                    "source": "automatic_onboarding",
                },
            )

            return Return.ok(
                OnboardResponse(
                    workspace_slug=workspace.slug,
                    workspace_name=workspace.name,
                    is_new_workspace=True,
                )
            )

    async def _available_slug(self, email: str) -> str:
        base = base_slug_from_email(email)
        for candidate in numbered_slug_candidates(base):
            if await self.uow.workspaces.get_by_slug(candidate) is None:
                return candidate
        return fallback_slug(base)
