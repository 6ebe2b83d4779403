from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator

from convoforms.api.error import ClientError, ServerError
from convoforms.api.utils.params import parse_uuid
from convoforms.api.utils.request_context import get_request_context
from convoforms.app.services.activity_logger import RequestContext
from convoforms.app.services.identity import CurrentUser
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.workspaces import (
    CreateWorkspaceUseCase,
    GetWorkspaceUseCase,
    ListActivitiesResponse,
    ListActivitiesUseCase,
    ListWorkspacesResponse,
    ListWorkspacesUseCase,
    UpdateWorkspaceUseCase,
    WorkspaceInfo,
)
from convoforms.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/workspaces")


class CreateWorkspaceRequest(BaseModel):
    """
    Create workspace HTTP request payload

    Slugs are lowercase letters, digits and hyphens.
    """

    name: str = Field(..., min_length=1, max_length=50)
    slug: str = Field(..., min_length=3, max_length=20, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = Field(None, max_length=200)
    type: str = Field("team", description="Workspace type (default/team)")


class UpdateWorkspaceRequest(BaseModel):
    """Partial workspace update; the slug cannot change"""

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    avatar_url: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return v


@router.get("", status_code=status.HTTP_200_OK, response_model=ListWorkspacesResponse)
async def list_workspaces(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the workspaces the caller belongs to, with the caller's role"""
    use_case = ListWorkspacesUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=WorkspaceInfo)
async def create_workspace(
    request: CreateWorkspaceRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Create Workspace

    The caller becomes the owner. Counts against the plan's workspace quota.

    Raises:
        - 400 Bad Request: INVALID_WORKSPACE_TYPE, USER_NOT_FOUND
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: PLAN_LIMIT_EXCEEDED
        - 409 Conflict: SLUG_TAKEN or DEFAULT_WORKSPACE_EXISTS
        - 500 Internal Server Error: Server error
    """
    use_case = CreateWorkspaceUseCase(uow, request_context)
    result = await use_case.execute(
        current_user,
        name=request.name,
        slug=request.slug,
        description=request.description,
        workspace_type=request.type,
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_WORKSPACE_TYPE", "USER_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "PLAN_LIMIT_EXCEEDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("SLUG_TAKEN", "DEFAULT_WORKSPACE_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get("/{slug}", status_code=status.HTTP_200_OK, response_model=WorkspaceInfo)
async def get_workspace(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Workspace by slug

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 404 Not Found: WORKSPACE_NOT_FOUND, also for non-members
    """
    use_case = GetWorkspaceUseCase(uow)
    result = await use_case.execute(current_user.user_id, slug)

    if result.is_err():
        error = result.error
        if error.code == "WORKSPACE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.patch("/{slug}", status_code=status.HTTP_200_OK, response_model=WorkspaceInfo)
async def update_workspace(
    slug: str,
    request: UpdateWorkspaceRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Update Workspace settings

    Requires workspace:update (owner or admin).

    Raises:
        - 400 Bad Request: INVALID_WORKSPACE_UPDATE
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: WORKSPACE_NOT_FOUND
    """
    use_case = UpdateWorkspaceUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id, slug, request.model_dump(exclude_unset=True)
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_WORKSPACE_UPDATE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INSUFFICIENT_PERMISSIONS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "WORKSPACE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/by-id/{workspace_id}/activities",
    status_code=status.HTTP_200_OK,
    response_model=ListActivitiesResponse,
)
async def list_activities(
    workspace_id: str,
    limit: int = Query(50, ge=1, le=100),
    cursor: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Workspace activity feed, newest first

    Pass next_cursor from the previous page to continue.

    Raises:
        - 400 Bad Request: Invalid workspace_id format
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = ListActivitiesUseCase(uow)
    result = await use_case.execute(current_user.user_id, workspace_uuid, limit, cursor)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_PERMISSIONS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
