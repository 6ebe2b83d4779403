"""
ConvoForms Domain Entities

All domain entities organized by model.
Each entity in its own file.
"""

# Export all enums
from .enums import (
    WorkspaceRole,
    WorkspaceType,
    InvitationStatus,
    EmailStatus,
    Plan,
    SubscriptionStatus,
)

# Export all entities
from .user import User
from .workspace import DEFAULT_WORKSPACE_SETTINGS, Workspace
from .workspace_member import WorkspaceMember
from .invitation import WorkspaceInvitation
from .subscription import Subscription
from .workspace_activity import WorkspaceActivity
from .form import Form
from .template import Template
from .form_template import FormTemplate

__all__ = [
    # Enums
    "WorkspaceRole",
    "WorkspaceType",
    "InvitationStatus",
    "EmailStatus",
    "Plan",
    "SubscriptionStatus",
    # Entities
    "User",
    "Workspace",
    "DEFAULT_WORKSPACE_SETTINGS",
    "WorkspaceMember",
    "WorkspaceInvitation",
    "Subscription",
    "WorkspaceActivity",
    "Form",
    "Template",
    "FormTemplate",
]
