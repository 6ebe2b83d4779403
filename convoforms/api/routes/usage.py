from fastapi import APIRouter, Depends, status

from convoforms.api.error import ClientError, ServerError
from convoforms.api.utils.params import parse_uuid
from convoforms.app.services.identity import CurrentUser
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.workspaces import (
    GetWorkspaceMemberUsageUseCase,
    GetWorkspaceUsageUseCase,
)
from convoforms.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/usage")


@router.get("/workspaces", status_code=status.HTTP_200_OK)
async def get_workspace_usage(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Owned workspaces against the caller's plan limit"""
    use_case = GetWorkspaceUsageUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/workspaces/by-id/{workspace_id}/members", status_code=status.HTTP_200_OK)
async def get_workspace_member_usage(
    workspace_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Seats used in a workspace against the caller's plan

    Raises:
        - 400 Bad Request: Invalid workspace_id format
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = GetWorkspaceMemberUsageUseCase(uow)
    result = await use_case.execute(current_user.user_id, workspace_uuid)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_PERMISSIONS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
