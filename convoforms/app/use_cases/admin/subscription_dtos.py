from typing import Optional

from pydantic import BaseModel

from convoforms.domain.entities import Plan, Subscription, SubscriptionStatus
from convoforms.domain.plans import resolve_plan_limits


class SubscriptionResponse(BaseModel):
    """Response DTO for admin subscription use cases"""

    user_id: str
    plan: str
    status: str
    max_workspaces: Optional[int] = None
    max_seats_per_workspace: Optional[int] = None
    addon_seats: int
    addon_price_per_seat: int
    effective_max_workspaces: int
    effective_max_seats_per_workspace: int
    updated_at: Optional[str] = None


def to_subscription_response(subscription: Subscription) -> SubscriptionResponse:
    limits = resolve_plan_limits(subscription)
    return SubscriptionResponse(
        user_id=subscription.user_id,
        plan=Plan(subscription.plan).value,
        status=SubscriptionStatus(subscription.status).value,
        max_workspaces=subscription.max_workspaces,
        max_seats_per_workspace=subscription.max_seats_per_workspace,
        addon_seats=subscription.addon_seats,
        addon_price_per_seat=subscription.addon_price_per_seat,
        effective_max_workspaces=limits.max_workspaces,
        effective_max_seats_per_workspace=limits.max_seats_per_workspace,
        updated_at=subscription.updated_at.isoformat() if subscription.updated_at else None,
    )
