from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, field_validator

from convoforms.api.error import ClientError, ServerError
from convoforms.api.utils.params import parse_uuid
from convoforms.api.utils.request_context import get_request_context
from convoforms.app.services.activity_logger import RequestContext
from convoforms.app.services.identity import CurrentUser
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.forms import (
    CreateFormUseCase,
    DeleteFormResponse,
    DeleteFormUseCase,
    FormInfo,
    GetFormUseCase,
    ListFormsResponse,
    ListFormsUseCase,
    PublishFormUseCase,
    UpdateFormUseCase,
)
from convoforms.app.use_cases.templates import (
    SavedFormTemplateResponse,
    SaveFormAsTemplateUseCase,
)
from convoforms.depends import get_current_user, get_unit_of_work
from convoforms.libs.result import Error

router = APIRouter()


class CreateFormRequest(BaseModel):
    """Create form HTTP request payload"""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    config: Dict[str, Any] = Field(default_factory=dict)
    is_conversational: bool = True


class UpdateFormRequest(BaseModel):
    """Partial form update"""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    is_conversational: Optional[bool] = None

    @field_validator("title", "config", "is_conversational")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


class SaveAsTemplateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    thumbnail_url: Optional[str] = None


def _raise_form_error(error: Error):
    if error.code == "INSUFFICIENT_PERMISSIONS":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "FORM_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get(
    "/workspaces/by-id/{workspace_id}/forms",
    status_code=status.HTTP_200_OK,
    response_model=ListFormsResponse,
)
async def list_forms(
    workspace_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the forms of a workspace (forms:read)"""
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = ListFormsUseCase(uow)
    result = await use_case.execute(current_user.user_id, workspace_uuid)

    if result.is_err():
        _raise_form_error(result.error)

    return result.value


@router.post(
    "/workspaces/by-id/{workspace_id}/forms",
    status_code=status.HTTP_201_CREATED,
    response_model=FormInfo,
)
async def create_form(
    workspace_id: str,
    request: CreateFormRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Create Form in a workspace

    Raises:
        - 400 Bad Request: Invalid workspace_id format
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (viewers and non-members)
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = CreateFormUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id,
        workspace_uuid,
        title=request.title,
        description=request.description,
        config=request.config,
        is_conversational=request.is_conversational,
    )

    if result.is_err():
        _raise_form_error(result.error)

    return result.value


@router.get("/forms/{form_id}", status_code=status.HTTP_200_OK, response_model=FormInfo)
async def get_form(
    form_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    form_uuid = parse_uuid(form_id, "INVALID_FORM_ID", "form ID")

    use_case = GetFormUseCase(uow)
    result = await use_case.execute(current_user.user_id, form_uuid)

    if result.is_err():
        _raise_form_error(result.error)

    return result.value


@router.put("/forms/{form_id}", status_code=status.HTTP_200_OK, response_model=FormInfo)
async def update_form(
    form_id: str,
    request: UpdateFormRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Update Form

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: FORM_NOT_FOUND
    """
    form_uuid = parse_uuid(form_id, "INVALID_FORM_ID", "form ID")

    use_case = UpdateFormUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id, form_uuid, request.model_dump(exclude_unset=True)
    )

    if result.is_err():
        _raise_form_error(result.error)

    return result.value


@router.delete(
    "/forms/{form_id}", status_code=status.HTTP_200_OK, response_model=DeleteFormResponse
)
async def delete_form(
    form_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Delete Form (owner or admin)

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: FORM_NOT_FOUND
    """
    form_uuid = parse_uuid(form_id, "INVALID_FORM_ID", "form ID")

    use_case = DeleteFormUseCase(uow, request_context)
    result = await use_case.execute(current_user.user_id, form_uuid)

    if result.is_err():
        _raise_form_error(result.error)

    return result.value


@router.post(
    "/forms/{form_id}/publish", status_code=status.HTTP_200_OK, response_model=FormInfo
)
async def publish_form(
    form_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """Publish Form; publishing an already published form changes nothing"""
    form_uuid = parse_uuid(form_id, "INVALID_FORM_ID", "form ID")

    use_case = PublishFormUseCase(uow, request_context)
    result = await use_case.execute(current_user.user_id, form_uuid)

    if result.is_err():
        _raise_form_error(result.error)

    return result.value


@router.post(
    "/forms/{form_id}/save-as-template",
    status_code=status.HTTP_201_CREATED,
    response_model=SavedFormTemplateResponse,
)
async def save_form_as_template(
    form_id: str,
    request: SaveAsTemplateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Save a form as a workspace template

    Requires templates:create in the form's workspace.

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: FORM_NOT_FOUND
    """
    form_uuid = parse_uuid(form_id, "INVALID_FORM_ID", "form ID")

    use_case = SaveFormAsTemplateUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id,
        form_uuid,
        name=request.name,
        description=request.description,
        category=request.category,
        thumbnail_url=request.thumbnail_url,
    )

    if result.is_err():
        _raise_form_error(result.error)

    return result.value
