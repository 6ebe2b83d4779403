from abc import ABC, abstractmethod
from typing import Optional

from convoforms.domain.entities import Subscription


class ISubscriptionRepository(ABC):
    """Subscription repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(
        self, user_id: str, for_update: bool = False
    ) -> Optional[Subscription]:
        """
        Get a user's subscription.

        for_update locks the row until the surrounding transaction ends.
        """
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        pass
