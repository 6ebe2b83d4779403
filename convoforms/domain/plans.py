"""
Plan catalogue and limit resolution.

-1 means unlimited for both workspace and seat limits.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from convoforms.domain.entities.enums import Plan
from convoforms.domain.entities.subscription import Subscription

UNLIMITED = -1


@dataclass(frozen=True)
class PlanLimits:
    max_workspaces: int
    max_seats_per_workspace: int
    can_invite_users: bool
    addon_seats_available: bool


PLAN_CONFIGS = MappingProxyType(
    {
        Plan.starter: PlanLimits(
            max_workspaces=1,
            max_seats_per_workspace=1,
            can_invite_users=False,
            addon_seats_available=False,
        ),
        Plan.pro: PlanLimits(
            max_workspaces=3,
            max_seats_per_workspace=5,
            can_invite_users=True,
            addon_seats_available=True,
        ),
        Plan.enterprise: PlanLimits(
            max_workspaces=UNLIMITED,
            max_seats_per_workspace=UNLIMITED,
            can_invite_users=True,
            addon_seats_available=True,
        ),
    }
)


def resolve_plan_limits(subscription: Optional[Subscription]) -> PlanLimits:
    """
    Effective limits for a subscription.

    Per-user overrides win over the plan defaults when set. Invite and
    add-on capabilities always come from the plan. No subscription means
    the starter plan.
    """
    if subscription is None:
        return PLAN_CONFIGS[Plan.starter]

    base = PLAN_CONFIGS[Plan(subscription.plan)]
    return PlanLimits(
        max_workspaces=(
            subscription.max_workspaces
            if subscription.max_workspaces is not None
            else base.max_workspaces
        ),
        max_seats_per_workspace=(
            subscription.max_seats_per_workspace
            if subscription.max_seats_per_workspace is not None
            else base.max_seats_per_workspace
        ),
        can_invite_users=base.can_invite_users,
        addon_seats_available=base.addon_seats_available,
    )


def is_unlimited(limit: int) -> bool:
    return limit == UNLIMITED
