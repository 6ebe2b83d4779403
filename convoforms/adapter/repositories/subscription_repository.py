from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from convoforms.app.repositories.subscription_repository import ISubscriptionRepository
from convoforms.domain.entities import Subscription


class SubscriptionRepository(ISubscriptionRepository):
    """Subscription repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(
        self, user_id: str, for_update: bool = False
    ) -> Optional[Subscription]:
        stmt = select(Subscription).where(Subscription.user_id == user_id)
        if for_update:
            # SELECT ... FOR UPDATE; SQLite ignores it
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
