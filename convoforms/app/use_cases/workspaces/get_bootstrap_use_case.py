"""
Get Bootstrap Use Case

Builds the per-request application context: who the caller is, which
plan they are on, which workspace they are looking at and what they
may do there.
"""

from typing import Optional

from convoforms.app.services.identity import CurrentUser
from convoforms.app.services.quota import (
    can_create_workspace,
    get_workspace_member_usage,
    get_workspace_usage,
)
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import Plan, SubscriptionStatus, WorkspaceType
from convoforms.domain.plans import PLAN_CONFIGS, is_unlimited, resolve_plan_limits
from convoforms.domain.rbac import is_action_allowed
from convoforms.libs.result import Result, Return

from .dtos import (
    BootstrapAbilities,
    BootstrapFeatures,
    BootstrapResponse,
    BootstrapSeatLimits,
    BootstrapUser,
    BootstrapWorkspaceLimits,
    to_workspace_info,
)


class GetBootstrapUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: CurrentUser, workspace_slug: Optional[str] = None
    ) -> Result[BootstrapResponse]:
        async with self.uow:
            user_id = identity.user_id
            user = await self.uow.users.get_by_id(user_id)
            subscription = await self.uow.subscriptions.get_by_user_id(user_id)
            plan = Plan(subscription.plan) if subscription else Plan.starter

            if subscription:
                subscription_status = SubscriptionStatus(subscription.status).value
            else:
                subscription_status = SubscriptionStatus.active.value

            memberships = await self.uow.workspaces.list_for_member(user_id)

            current = None
            if workspace_slug:
                current = next(
                    ((ws, role) for ws, role in memberships if ws.slug == workspace_slug),
                    None,
                )
            else:
                current = next(
                    (
                        (ws, role)
                        for ws, role in memberships
                        if ws.type == WorkspaceType.default and ws.owner_id == user_id
                    ),
                    None,
                )

            limits = resolve_plan_limits(subscription)
            usage = await get_workspace_usage(self.uow, user_id)
            create_decision = await can_create_workspace(self.uow, user_id)

            seat_limits = None
            abilities = None
            if current:
                workspace, role = current
                member_usage = (
                    await get_workspace_member_usage(self.uow, workspace.id, user_id)
                )["members"]
                seat_limits = BootstrapSeatLimits(
                    max_seats=member_usage["limit"],
                    current_seats=member_usage["used"],
                    can_invite_more_members=(
                        is_unlimited(member_usage["limit"])
                        or member_usage["used"] < member_usage["limit"]
                    ),
                )
                abilities = BootstrapAbilities(
                    can_manage_workspace_settings=is_action_allowed(role, "workspace", "update"),
                    can_manage_members=is_action_allowed(role, "members", "update"),
                    can_delete_workspace=is_action_allowed(role, "workspace", "delete"),
                )

            return Return.ok(
                BootstrapResponse(
                    user=BootstrapUser(
                        id=user_id,
                        email=user.email if user else identity.email,
                        first_name=user.first_name if user else identity.first_name,
                        last_name=user.last_name if user else identity.last_name,
                        avatar_url=user.avatar_url if user else identity.avatar_url,
                        plan=plan.value,
                        subscription_status=subscription_status,
                    ),
                    current_workspace=to_workspace_info(*current) if current else None,
                    workspaces=[to_workspace_info(ws, role) for ws, role in memberships],
                    workspace_limits=BootstrapWorkspaceLimits(
                        max_workspaces=limits.max_workspaces,
                        current_workspaces_owned=usage["workspaces"]["used"],
                        can_create_more_workspaces=create_decision.allowed,
                    ),
                    seat_limits=seat_limits,
                    features=BootstrapFeatures(
                        can_invite_users_to_any_workspace=PLAN_CONFIGS[plan].can_invite_users
                    ),
                    abilities=abilities,
                )
            )
