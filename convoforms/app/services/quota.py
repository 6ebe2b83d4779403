"""
Plan quota checks.

Usage is recounted from the database on every call. Passing lock=True
takes a row lock on the user's subscription so that concurrent
check-then-insert flows for the same user are serialized; the lock is
held until the caller's transaction commits or rolls back.
"""

from dataclasses import asdict, dataclass
from typing import Optional
from uuid import UUID

from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import Plan, Subscription, SubscriptionStatus
from convoforms.domain.plans import PlanLimits, is_unlimited, resolve_plan_limits


@dataclass(frozen=True)
class QuotaDecision:
    allowed: bool
    reason: Optional[str] = None
    available_seats: Optional[int] = None


async def _load_subscription(
    uow: UnitOfWork, user_id: str, lock: bool
) -> Optional[Subscription]:
    return await uow.subscriptions.get_by_user_id(user_id, for_update=lock)


async def get_user_plan_limits(uow: UnitOfWork, user_id: str) -> PlanLimits:
    subscription = await _load_subscription(uow, user_id, lock=False)
    return resolve_plan_limits(subscription)


async def can_create_workspace(
    uow: UnitOfWork, user_id: Optional[str], lock: bool = False
) -> QuotaDecision:
    if not user_id:
        return QuotaDecision(allowed=False, reason="User not authenticated")

    subscription = await _load_subscription(uow, user_id, lock)
    limits = resolve_plan_limits(subscription)

    if is_unlimited(limits.max_workspaces):
        return QuotaDecision(allowed=True)

    current = await uow.workspaces.count_by_owner(user_id)
    if current >= limits.max_workspaces:
        return QuotaDecision(
            allowed=False,
            reason=(
                f"You've reached your workspace limit of {limits.max_workspaces}. "
                "Upgrade your plan to create more workspaces."
            ),
        )

    return QuotaDecision(allowed=True)


async def can_invite_to_workspace(
    uow: UnitOfWork, workspace_id: UUID, user_id: Optional[str], lock: bool = False
) -> QuotaDecision:
    """
    Seat check for inviting into a workspace, evaluated against the
    plan of user_id (the inviting user).
    """
    if not user_id:
        return QuotaDecision(allowed=False, reason="User not authenticated")

    subscription = await _load_subscription(uow, user_id, lock)
    limits = resolve_plan_limits(subscription)

    if not limits.can_invite_users:
        return QuotaDecision(
            allowed=False,
            reason=(
                "Your plan does not support inviting team members. "
                "Upgrade to Pro or Enterprise to add team members."
            ),
        )

    if is_unlimited(limits.max_seats_per_workspace):
        return QuotaDecision(allowed=True)

    current_members = await uow.members.count_by_workspace(workspace_id)
    addon_seats = subscription.addon_seats if subscription else 0
    total_seats = limits.max_seats_per_workspace + addon_seats

    if current_members >= total_seats:
        if limits.addon_seats_available:
            reason = (
                f"You've reached your seat limit of {total_seats}. "
                "Purchase additional seats or upgrade your plan."
            )
        else:
            reason = (
                f"You've reached your seat limit of {total_seats}. "
                "Upgrade to a higher plan to add more members."
            )
        return QuotaDecision(allowed=False, reason=reason, available_seats=0)

    return QuotaDecision(allowed=True, available_seats=total_seats - current_members)


async def get_workspace_usage(uow: UnitOfWork, user_id: str) -> dict:
    limits = await get_user_plan_limits(uow, user_id)
    used = await uow.workspaces.count_by_owner(user_id)
    return {
        "workspaces": {
            "used": used,
            "limit": limits.max_workspaces,
            "unlimited": is_unlimited(limits.max_workspaces),
        },
        "plan_limits": asdict(limits),
    }


async def get_workspace_member_usage(
    uow: UnitOfWork, workspace_id: UUID, user_id: str
) -> dict:
    subscription = await _load_subscription(uow, user_id, lock=False)
    limits = resolve_plan_limits(subscription)
    used = await uow.members.count_by_workspace(workspace_id)
    addon_seats = subscription.addon_seats if subscription else 0

    if is_unlimited(limits.max_seats_per_workspace):
        total_seats = limits.max_seats_per_workspace
    else:
        total_seats = limits.max_seats_per_workspace + addon_seats

    return {
        "members": {
            "used": used,
            "limit": total_seats,
            "unlimited": is_unlimited(total_seats),
            "addon_seats": addon_seats,
        },
        "plan_limits": asdict(limits),
    }


async def create_default_subscription(uow: UnitOfWork, user_id: str) -> Subscription:
    """Return the user's subscription, creating a starter one if missing"""
    existing = await uow.subscriptions.get_by_user_id(user_id)
    if existing:
        return existing

    subscription = Subscription(
        user_id=user_id,
        plan=Plan.starter,
        status=SubscriptionStatus.active,
        addon_seats=0,
        addon_price_per_seat=200,
    )
    return await uow.subscriptions.create(subscription)
