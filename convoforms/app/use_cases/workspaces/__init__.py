"""
Workspace Use Cases

Workspace provisioning, lookup, settings, usage and activity feed.
"""

from .create_workspace_use_case import CreateWorkspaceUseCase
from .dtos import (
    BootstrapResponse,
    ListActivitiesResponse,
    ListWorkspacesResponse,
    OnboardResponse,
    WorkspaceInfo,
)
from .get_bootstrap_use_case import GetBootstrapUseCase
from .get_usage_use_cases import GetWorkspaceMemberUsageUseCase, GetWorkspaceUsageUseCase
from .get_workspace_use_case import GetWorkspaceUseCase
from .list_activities_use_case import ListActivitiesUseCase
from .list_workspaces_use_case import ListWorkspacesUseCase
from .onboard_use_case import OnboardUseCase
from .update_workspace_use_case import UpdateWorkspaceUseCase

__all__ = [
    "CreateWorkspaceUseCase",
    "ListWorkspacesUseCase",
    "GetWorkspaceUseCase",
    "UpdateWorkspaceUseCase",
    "OnboardUseCase",
    "GetBootstrapUseCase",
    "GetWorkspaceUsageUseCase",
    "GetWorkspaceMemberUsageUseCase",
    "ListActivitiesUseCase",
    "WorkspaceInfo",
    "ListWorkspacesResponse",
    "OnboardResponse",
    "BootstrapResponse",
    "ListActivitiesResponse",
]
