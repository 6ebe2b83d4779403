"""Admin use cases for billing and support operations."""

from .get_subscription_use_case import GetSubscriptionUseCase
from .subscription_dtos import SubscriptionResponse
from .update_subscription_use_case import UpdateSubscriptionUseCase

__all__ = [
    "GetSubscriptionUseCase",
    "UpdateSubscriptionUseCase",
    "SubscriptionResponse",
]
