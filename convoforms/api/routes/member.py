from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from convoforms.api.error import ClientError, ServerError
from convoforms.api.utils.params import parse_uuid
from convoforms.api.utils.request_context import get_request_context
from convoforms.app.services.activity_logger import RequestContext
from convoforms.app.services.identity import CurrentUser
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.members import (
    ListMembersResponse,
    ListMembersUseCase,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    UpdateMemberRoleResponse,
    UpdateMemberRoleUseCase,
)
from convoforms.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/workspaces/by-id/{workspace_id}/members")


class UpdateMemberRoleRequest(BaseModel):
    """Change member role HTTP request payload"""

    role: str = Field(..., description="New role (admin/member/viewer)")


@router.get("", status_code=status.HTTP_200_OK, response_model=ListMembersResponse)
async def list_members(
    workspace_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List workspace members with their profiles

    Raises:
        - 400 Bad Request: Invalid workspace_id format
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (not a member)
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = ListMembersUseCase(uow)
    result = await use_case.execute(current_user.user_id, workspace_uuid)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_PERMISSIONS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.put(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=UpdateMemberRoleResponse
)
async def update_member_role(
    workspace_id: str,
    user_id: str,
    request: UpdateMemberRoleRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Change a member's role

    The caller must outrank both the member's current role and the new role.

    Raises:
        - 400 Bad Request: INVALID_ROLE, CANNOT_CHANGE_OWN_ROLE, CANNOT_MODIFY_OWNER
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS or CANNOT_MANAGE_ROLE
        - 404 Not Found: MEMBER_NOT_FOUND
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = UpdateMemberRoleUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id, workspace_uuid, user_id, request.role
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_ROLE", "CANNOT_CHANGE_OWN_ROLE", "CANNOT_MODIFY_OWNER"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INSUFFICIENT_PERMISSIONS", "CANNOT_MANAGE_ROLE"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "MEMBER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=RemoveMemberResponse
)
async def remove_member(
    workspace_id: str,
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Remove a member from the workspace

    Raises:
        - 400 Bad Request: CANNOT_REMOVE_OWNER or CANNOT_REMOVE_SELF
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS or CANNOT_MANAGE_ROLE
        - 404 Not Found: MEMBER_NOT_FOUND
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = RemoveMemberUseCase(uow, request_context)
    result = await use_case.execute(current_user.user_id, workspace_uuid, user_id)

    if result.is_err():
        error = result.error
        if error.code in ("CANNOT_REMOVE_OWNER", "CANNOT_REMOVE_SELF"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INSUFFICIENT_PERMISSIONS", "CANNOT_MANAGE_ROLE"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "MEMBER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
