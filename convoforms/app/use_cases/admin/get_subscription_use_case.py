"""
Use Case: Get Subscription

Billing/support lookup of a user's subscription and effective limits.
"""

from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Error, Result, Return

from .subscription_dtos import SubscriptionResponse, to_subscription_response


class GetSubscriptionUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[SubscriptionResponse]:
        async with self.uow:
            subscription = await self.uow.subscriptions.get_by_user_id(user_id)
            if not subscription:
                return Return.err(
                    Error("SUBSCRIPTION_NOT_FOUND", "Subscription not found")
                )
            return Return.ok(to_subscription_response(subscription))
