from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from convoforms.api.error import ClientError, ServerError
from convoforms.api.utils.params import parse_uuid
from convoforms.api.utils.request_context import get_request_context
from convoforms.app.services.activity_logger import RequestContext
from convoforms.app.services.email_sender import IEmailSender
from convoforms.app.services.identity import CurrentUser
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    InviteMemberResponse,
    InviteMemberUseCase,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    RevokeInvitationResponse,
    RevokeInvitationUseCase,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)
from convoforms.depends import get_current_user, get_email_sender, get_unit_of_work

router = APIRouter()


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload

    Validates incoming request for inviting someone to a workspace.
    """

    email: EmailStr = Field(..., description="Email address to invite")
    role: str = Field("member", description="Role to assign (admin/member/viewer)")


class AcceptInvitationRequest(BaseModel):
    """Accept invitation HTTP request payload"""

    token: str = Field(..., description="Raw invitation token from the invitation link")


@router.get(
    "/workspaces/by-id/{workspace_id}/invite",
    status_code=status.HTTP_200_OK,
    response_model=ListInvitationsResponse,
)
async def list_invitations(
    workspace_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List workspace invitations, newest first

    Raises:
        - 400 Bad Request: Invalid workspace_id format
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = ListInvitationsUseCase(uow)
    result = await use_case.execute(current_user.user_id, workspace_uuid)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_PERMISSIONS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.post(
    "/workspaces/by-id/{workspace_id}/invite",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteMemberResponse,
)
async def invite_member(
    workspace_id: str,
    request: InviteMemberRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Invite Member to Workspace

    Creates a pending invitation and emails the link. A failed email does
    not fail the request; check email_sent in the response.

    Raises:
        - 400 Bad Request: Invalid workspace_id or INVALID_ROLE
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS or PLAN_LIMIT_EXCEEDED
        - 404 Not Found: WORKSPACE_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER or INVITE_ALREADY_EXISTS
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = InviteMemberUseCase(
        uow,
        email_sender,
        app_url=ApplicationConfig.APP_URL,
        request_context=request_context,
        ttl_days=ApplicationConfig.INVITATION_TTL_DAYS,
    )
    result = await use_case.execute(
        current_user.user_id, workspace_uuid, request.email, request.role
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ROLE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INSUFFICIENT_PERMISSIONS", "PLAN_LIMIT_EXCEEDED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "WORKSPACE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("ALREADY_MEMBER", "INVITE_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.delete(
    "/workspaces/by-id/{workspace_id}/invitations/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeInvitationResponse,
)
async def revoke_invitation(
    workspace_id: str,
    invitation_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Revoke a pending invitation

    Raises:
        - 400 Bad Request: Invalid workspace_id or invitation_id format
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")
    invitation_uuid = parse_uuid(invitation_id, "INVALID_INVITATION_ID", "invitation ID")

    use_case = RevokeInvitationUseCase(uow, request_context)
    result = await use_case.execute(current_user.user_id, workspace_uuid, invitation_uuid)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_PERMISSIONS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "INVITATION_ALREADY_ACCEPTED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/invitations",
    status_code=status.HTTP_200_OK,
    response_model=ValidateInvitationResponse,
)
async def validate_invitation(
    token: str = Query("", description="Raw invitation token"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Invitation (no authentication)

    Returns the workspace and inviter shown on the invitation landing page.

    Raises:
        - 400 Bad Request: TOKEN_REQUIRED
        - 404 Not Found: INVALID_TOKEN
        - 410 Gone: INVITATION_EXPIRED or INVITATION_NO_LONGER_VALID
    """
    use_case = ValidateInvitationUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code == "TOKEN_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INVALID_TOKEN", "WORKSPACE_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVITATION_EXPIRED", "INVITATION_NO_LONGER_VALID"):
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value


@router.post(
    "/invitations",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    request: AcceptInvitationRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Accept Invitation

    Adds the caller to the workspace with the invited role and sends a
    welcome email.

    Raises:
        - 400 Bad Request: TOKEN_REQUIRED
        - 401 Unauthorized: Invalid or expired token
        - 404 Not Found: INVALID_TOKEN
        - 409 Conflict: ALREADY_MEMBER
        - 410 Gone: INVITATION_EXPIRED or INVITATION_NO_LONGER_VALID
    """
    use_case = AcceptInvitationUseCase(
        uow,
        email_sender,
        app_url=ApplicationConfig.APP_URL,
        request_context=request_context,
    )
    result = await use_case.execute(request.token, current_user)

    if result.is_err():
        error = result.error
        if error.code == "TOKEN_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("INVALID_TOKEN", "WORKSPACE_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ALREADY_MEMBER":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code in ("INVITATION_EXPIRED", "INVITATION_NO_LONGER_VALID"):
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value
