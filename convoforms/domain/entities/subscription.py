"""
Subscription Entity

Billing plan of a user, with per-user limit overrides.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from convoforms.domain.base import utc_now

from .enums import Plan, SubscriptionStatus


class Subscription(SQLModel, table=True):
    """
    Subscription entity - at most one per user.

    Business Rules:
    - A user without a subscription is treated as starter
    - max_workspaces / max_seats_per_workspace override the plan when set
    - addon_seats add to the per-workspace seat limit
    """

    __tablename__ = "subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True, max_length=255)

    plan: Plan = Field(default=Plan.starter)
    status: SubscriptionStatus = Field(default=SubscriptionStatus.active)

    # Overrides
    max_workspaces: Optional[int] = Field(default=None)
    max_seats_per_workspace: Optional[int] = Field(default=None)

    addon_seats: int = Field(default=0)
    addon_price_per_seat: int = Field(default=200)  # cents

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
