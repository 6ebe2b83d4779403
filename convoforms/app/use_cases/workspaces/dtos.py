"""
Workspace Use Case DTOs
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from convoforms.domain.entities import Workspace, WorkspaceType


class WorkspaceInfo(BaseModel):
    id: str
    name: str
    slug: str
    type: str
    owner_id: str
    description: Optional[str] = None
    avatar_url: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    created_at: str
    updated_at: str
    role: Optional[str] = None


class ListWorkspacesResponse(BaseModel):
    workspaces: List[WorkspaceInfo]


class OnboardResponse(BaseModel):
    workspace_slug: str
    workspace_name: str
    is_new_workspace: bool


class BootstrapUser(BaseModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    plan: str
    subscription_status: Optional[str] = None


class BootstrapWorkspaceLimits(BaseModel):
    max_workspaces: int
    current_workspaces_owned: int
    can_create_more_workspaces: bool


class BootstrapSeatLimits(BaseModel):
    max_seats: int
    current_seats: int
    can_invite_more_members: bool


class BootstrapFeatures(BaseModel):
    can_invite_users_to_any_workspace: bool


class BootstrapAbilities(BaseModel):
    can_manage_workspace_settings: bool
    can_manage_members: bool
    can_delete_workspace: bool


class BootstrapResponse(BaseModel):
    """Everything a client needs to render the app shell for one request"""

    user: BootstrapUser
    current_workspace: Optional[WorkspaceInfo] = None
    workspaces: List[WorkspaceInfo]
    workspace_limits: BootstrapWorkspaceLimits
    seat_limits: Optional[BootstrapSeatLimits] = None
    features: BootstrapFeatures
    abilities: Optional[BootstrapAbilities] = None


class ActivityInfo(BaseModel):
    id: str
    user_id: str
    action: str
    resource: Optional[str] = None
    resource_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: str


class ListActivitiesResponse(BaseModel):
    activities: List[ActivityInfo]
    next_cursor: Optional[str] = None


def to_workspace_info(workspace: Workspace, role=None) -> WorkspaceInfo:
    return WorkspaceInfo(
        id=str(workspace.id),
        name=workspace.name,
        slug=workspace.slug,
        type=WorkspaceType(workspace.type).value,
        owner_id=workspace.owner_id,
        description=workspace.description,
        avatar_url=workspace.avatar_url,
        settings=workspace.settings,
        created_at=workspace.created_at.isoformat(),
        updated_at=workspace.updated_at.isoformat(),
        role=getattr(role, "value", role),
    )
