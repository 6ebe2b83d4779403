"""
ConvoForms Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class WorkspaceRole(str, Enum):
    """User role within a workspace"""

    owner = "owner"
    admin = "admin"
    member = "member"
    viewer = "viewer"


class WorkspaceType(str, Enum):
    """Workspace type - every owner has at most one default workspace"""

    default = "default"
    team = "team"


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"


class EmailStatus(str, Enum):
    """Delivery status of the invitation email"""

    pending = "pending"
    sent = "sent"
    failed = "failed"


class Plan(str, Enum):
    """Subscription plan"""

    starter = "starter"
    pro = "pro"
    enterprise = "enterprise"


class SubscriptionStatus(str, Enum):
    """Subscription status"""

    active = "active"
    canceled = "canceled"
    past_due = "past_due"
