"""
Admin API Routes - Billing and Support Endpoints

These endpoints are for internal service integrations (e.g., billing system).
Authentication is via Admin API Key, not user identity tokens.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from convoforms.api.error import ClientError, ServerError
from convoforms.api.utils.admin_auth import verify_admin_api_key
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.admin import (
    GetSubscriptionUseCase,
    SubscriptionResponse,
    UpdateSubscriptionUseCase,
)
from convoforms.domain.entities import Plan, SubscriptionStatus
from convoforms.depends import get_unit_of_work

router = APIRouter(prefix="/admin")


class UpdateSubscriptionRequest(BaseModel):
    """
    Update subscription HTTP request payload

    Only fields present in the body are applied. An explicit null on an
    override clears it so the plan default applies again.
    """

    plan: Optional[Plan] = None
    status: Optional[SubscriptionStatus] = None
    max_workspaces: Optional[int] = Field(None, ge=-1)
    max_seats_per_workspace: Optional[int] = Field(None, ge=-1)
    addon_seats: Optional[int] = Field(None, ge=0)


@router.get(
    "/subscriptions/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=SubscriptionResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def get_subscription(
    user_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get a user's subscription with effective limits

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: SUBSCRIPTION_NOT_FOUND
    """
    use_case = GetSubscriptionUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "SUBSCRIPTION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.put(
    "/subscriptions/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=SubscriptionResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def update_subscription(
    user_id: str,
    request: UpdateSubscriptionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set plan, status, limit overrides and add-on seats

    Billing system endpoint. Creates a starter subscription first when the
    user has none.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = UpdateSubscriptionUseCase(uow)
    result = await use_case.execute(user_id, request.model_dump(exclude_unset=True))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
