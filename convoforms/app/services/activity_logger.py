"""
Workspace activity logging.

Activities are written after the change they describe has been
committed, in their own commit. A failure to record an activity is
logged and swallowed so it never fails the request that caused it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID

from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import WorkspaceActivity

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


@dataclass(frozen=True)
class RequestContext:
    """Client details of the request that triggered an activity"""

    ip_address: str = UNKNOWN
    user_agent: str = UNKNOWN

    @classmethod
    def from_headers(cls, headers) -> "RequestContext":
        forwarded_for = headers.get("x-forwarded-for")
        if forwarded_for:
            ip_address = forwarded_for.split(",")[0].strip() or UNKNOWN
        else:
            ip_address = headers.get("x-real-ip") or UNKNOWN
        return cls(
            ip_address=ip_address,
            user_agent=headers.get("user-agent") or UNKNOWN,
        )


class ActivityLogger:
    def __init__(self, uow: UnitOfWork, context: Optional[RequestContext] = None):
        self.uow = uow
        self.context = context or RequestContext()

    async def log(
        self,
        workspace_id: UUID,
        user_id: str,
        action: str,
        resource: Optional[str] = None,
        resource_id: Optional[Any] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[WorkspaceActivity]:
        activity = WorkspaceActivity(
            workspace_id=workspace_id,
            user_id=user_id,
            action=action,
            resource=resource,
            resource_id=str(resource_id) if resource_id is not None else None,
            activity_metadata=metadata,
            ip_address=self.context.ip_address,
            user_agent=self.context.user_agent,
        )
        try:
            activity = await self.uow.activities.create(activity)
            await self.uow.commit()
            return activity
        except Exception:
            logger.exception(f"Failed to log workspace activity {action}")
            await self._safe_rollback()
            return None

    async def _safe_rollback(self):
        try:
            await self.uow.rollback()
        except Exception:
            logger.exception("Rollback after activity logging failure failed")

    # Workspace

    async def workspace_created(self, workspace_id, user_id, metadata=None):
        return await self.log(
            workspace_id, user_id, "workspace.created", "workspace", workspace_id, metadata
        )

    async def workspace_updated(self, workspace_id, user_id, changes):
        return await self.log(
            workspace_id,
            user_id,
            "workspace.updated",
            "workspace",
            workspace_id,
            {"changes": changes},
        )

    # Members

    async def member_invited(self, workspace_id, user_id, invitation_id, email, role):
        return await self.log(
            workspace_id,
            user_id,
            "member.invited",
            "invitation",
            invitation_id,
            {"email": email, "role": role},
        )

    async def member_joined(self, workspace_id, user_id, invitation_id, role):
        return await self.log(
            workspace_id,
            user_id,
            "member.joined",
            "member",
            user_id,
            {"invitation_id": str(invitation_id), "role": role},
        )

    async def member_role_changed(
        self, workspace_id, user_id, target_user_id, old_role, new_role
    ):
        return await self.log(
            workspace_id,
            user_id,
            "member.role_changed",
            "member",
            target_user_id,
            {"old_role": old_role, "new_role": new_role},
        )

    async def member_removed(self, workspace_id, user_id, target_user_id, role):
        return await self.log(
            workspace_id,
            user_id,
            "member.removed",
            "member",
            target_user_id,
            {"role": role},
        )

    async def invitation_revoked(self, workspace_id, user_id, invitation_id, email):
        return await self.log(
            workspace_id,
            user_id,
            "invitation.revoked",
            "invitation",
            invitation_id,
            {"email": email},
        )

    # Forms

    async def form_created(self, workspace_id, user_id, form_id, title, metadata=None):
        return await self.log(
            workspace_id,
            user_id,
            "form.created",
            "form",
            form_id,
            {"title": title, **(metadata or {})},
        )

    async def form_updated(self, workspace_id, user_id, form_id, changes):
        return await self.log(
            workspace_id, user_id, "form.updated", "form", form_id, {"changes": changes}
        )

    async def form_deleted(self, workspace_id, user_id, form_id, title):
        return await self.log(
            workspace_id, user_id, "form.deleted", "form", form_id, {"title": title}
        )

    async def form_published(self, workspace_id, user_id, form_id, title):
        return await self.log(
            workspace_id, user_id, "form.published", "form", form_id, {"title": title}
        )

    # Templates

    async def template_created(self, workspace_id, user_id, template_id, name):
        return await self.log(
            workspace_id, user_id, "template.created", "template", template_id, {"name": name}
        )

    async def template_cloned(self, workspace_id, user_id, template_id, source_id, name):
        return await self.log(
            workspace_id,
            user_id,
            "template.cloned",
            "template",
            template_id,
            {"source_template_id": str(source_id), "name": name},
        )

    async def template_updated(self, workspace_id, user_id, template_id, changes):
        return await self.log(
            workspace_id,
            user_id,
            "template.updated",
            "template",
            template_id,
            {"changes": changes},
        )

    async def template_deleted(self, workspace_id, user_id, template_id, name):
        return await self.log(
            workspace_id, user_id, "template.deleted", "template", template_id, {"name": name}
        )
