"""
Use Case: Update Subscription

Billing integration endpoint to change a user's plan and limit overrides.
"""

from typing import Any, Dict

from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import Plan, Subscription, SubscriptionStatus
from convoforms.libs.result import Error, Result, Return

from .subscription_dtos import SubscriptionResponse, to_subscription_response

NULLABLE_OVERRIDES = ("max_workspaces", "max_seats_per_workspace")


class UpdateSubscriptionUseCase:
    """
    Set plan, status and overrides of a user's subscription.

    Business Logic:
    1. Validate the user exists
    2. Create a starter subscription if the user has none
    3. Apply only the fields present in changes; an explicit None clears
       an override so the plan default applies again
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, changes: Dict[str, Any]
    ) -> Result[SubscriptionResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            subscription = await self.uow.subscriptions.get_by_user_id(
                user_id, for_update=True
            )
            if subscription is None:
                subscription = await self.uow.subscriptions.create(
                    Subscription(user_id=user_id)
                )

            if "plan" in changes and changes["plan"] is not None:
                subscription.plan = Plan(changes["plan"])
            if "status" in changes and changes["status"] is not None:
                subscription.status = SubscriptionStatus(changes["status"])
            for field in NULLABLE_OVERRIDES:
                if field in changes:
                    setattr(subscription, field, changes[field])
            if "addon_seats" in changes:
                subscription.addon_seats = changes["addon_seats"] or 0

            subscription.updated_at = utc_now()
            subscription = await self.uow.subscriptions.update(subscription)
            await self.uow.commit()

            return Return.ok(to_subscription_response(subscription))
