from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from convoforms.api.error import ClientError, ServerError
from convoforms.api.utils.request_context import get_request_context
from convoforms.app.services.activity_logger import RequestContext
from convoforms.app.services.identity import CurrentUser
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.workspaces import (
    BootstrapResponse,
    GetBootstrapUseCase,
    OnboardResponse,
    OnboardUseCase,
)
from convoforms.depends import get_current_user, get_unit_of_work

router = APIRouter()


@router.post(
    "/workspace/onboard", status_code=status.HTTP_200_OK, response_model=OnboardResponse
)
async def onboard(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Onboard the caller

    Creates the local user, the starter subscription and the default
    workspace on first call. Later calls return the existing default
    workspace with is_new = false.

    Raises:
        - 400 Bad Request: EMAIL_REQUIRED when the token carries no email
        - 401 Unauthorized: Invalid or expired token
        - 500 Internal Server Error: Server error
    """
    use_case = OnboardUseCase(uow, request_context)
    result = await use_case.execute(current_user)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get("/bootstrap", status_code=status.HTTP_200_OK, response_model=BootstrapResponse)
async def bootstrap(
    workspace_slug: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Everything the client needs after sign-in: profile, workspaces, the
    current workspace, quota usage, plan features and UI abilities.

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 500 Internal Server Error: Server error
    """
    use_case = GetBootstrapUseCase(uow)
    result = await use_case.execute(current_user, workspace_slug)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
