from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator

from convoforms.api.error import ClientError, ServerError
from convoforms.api.utils.params import parse_uuid
from convoforms.api.utils.request_context import get_request_context
from convoforms.app.services.activity_logger import RequestContext
from convoforms.app.services.identity import CurrentUser
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.forms import FormInfo
from convoforms.app.use_cases.templates import (
    CloneTemplateUseCase,
    CreateFormFromTemplateUseCase,
    CreateTemplateUseCase,
    DeleteTemplateResponse,
    DeleteTemplateUseCase,
    GetTemplateUseCase,
    ListTemplatesResponse,
    ListTemplatesUseCase,
    TemplateInfo,
    UpdateTemplateUseCase,
)
from convoforms.depends import get_current_user, get_unit_of_work
from convoforms.libs.result import Error

router = APIRouter(prefix="/templates")


class CreateTemplateRequest(BaseModel):
    """Create workspace template HTTP request payload"""

    workspace_id: str
    name: str = Field(..., min_length=1, max_length=255)
    form_schema: Dict[str, Any]
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    thumbnail_url: Optional[str] = None


class UpdateTemplateRequest(BaseModel):
    """Partial template update; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    form_schema: Optional[Dict[str, Any]] = None
    category: Optional[str] = Field(None, max_length=100)
    thumbnail_url: Optional[str] = None

    @field_validator("name", "form_schema")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


class CloneTemplateRequest(BaseModel):
    """Target workspace and optional overrides for the copy"""

    workspace_id: str
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class CreateFormFromTemplateRequest(BaseModel):
    workspace_id: str
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


def _raise_template_error(error: Error):
    if error.code == "INVALID_TEMPLATE_UPDATE":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code in (
        "INSUFFICIENT_PERMISSIONS",
        "CANNOT_DELETE_GLOBAL_TEMPLATE",
        "CANNOT_MODIFY_GLOBAL_TEMPLATE",
    ):
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "TEMPLATE_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=ListTemplatesResponse)
async def list_templates(
    workspace_id: str = Query(..., description="Workspace whose templates to include"),
    is_global: Optional[bool] = Query(None),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Browse templates

    Returns global templates plus the workspace's own, most used first.

    Raises:
        - 400 Bad Request: Invalid workspace_id format
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    workspace_uuid = parse_uuid(workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = ListTemplatesUseCase(uow)
    result = await use_case.execute(
        current_user.user_id,
        workspace_uuid,
        is_global=is_global,
        category=category,
        search=search,
        page=page,
        limit=limit,
    )

    if result.is_err():
        _raise_template_error(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TemplateInfo)
async def create_template(
    request: CreateTemplateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Create Template in a workspace (templates:create)

    Raises:
        - 400 Bad Request: Invalid workspace_id format
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    workspace_uuid = parse_uuid(request.workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = CreateTemplateUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id,
        workspace_uuid,
        name=request.name,
        form_schema=request.form_schema,
        description=request.description,
        category=request.category,
        thumbnail_url=request.thumbnail_url,
    )

    if result.is_err():
        _raise_template_error(result.error)

    return result.value


@router.get("/{template_id}", status_code=status.HTTP_200_OK, response_model=TemplateInfo)
async def get_template(
    template_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get a template

    Global templates are readable by any user; workspace templates by
    members of that workspace.

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: TEMPLATE_NOT_FOUND
    """
    template_uuid = parse_uuid(template_id, "INVALID_TEMPLATE_ID", "template ID")

    use_case = GetTemplateUseCase(uow)
    result = await use_case.execute(current_user.user_id, template_uuid)

    if result.is_err():
        _raise_template_error(result.error)

    return result.value


@router.put("/{template_id}", status_code=status.HTTP_200_OK, response_model=TemplateInfo)
async def update_template(
    template_id: str,
    request: UpdateTemplateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Update a workspace template (templates:update)

    Raises:
        - 400 Bad Request: INVALID_TEMPLATE_UPDATE
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS or CANNOT_MODIFY_GLOBAL_TEMPLATE
        - 404 Not Found: TEMPLATE_NOT_FOUND
    """
    template_uuid = parse_uuid(template_id, "INVALID_TEMPLATE_ID", "template ID")

    use_case = UpdateTemplateUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id, template_uuid, request.model_dump(exclude_unset=True)
    )

    if result.is_err():
        _raise_template_error(result.error)

    return result.value


@router.delete(
    "/{template_id}", status_code=status.HTTP_200_OK, response_model=DeleteTemplateResponse
)
async def delete_template(
    template_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Delete a workspace template

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS or CANNOT_DELETE_GLOBAL_TEMPLATE
        - 404 Not Found: TEMPLATE_NOT_FOUND
    """
    template_uuid = parse_uuid(template_id, "INVALID_TEMPLATE_ID", "template ID")

    use_case = DeleteTemplateUseCase(uow, request_context)
    result = await use_case.execute(current_user.user_id, template_uuid)

    if result.is_err():
        _raise_template_error(result.error)

    return result.value


@router.post(
    "/{template_id}/clone", status_code=status.HTTP_201_CREATED, response_model=TemplateInfo
)
async def clone_template(
    template_id: str,
    request: CloneTemplateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Clone a template into a workspace

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: TEMPLATE_NOT_FOUND
    """
    template_uuid = parse_uuid(template_id, "INVALID_TEMPLATE_ID", "template ID")
    workspace_uuid = parse_uuid(request.workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = CloneTemplateUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id,
        template_uuid,
        workspace_uuid,
        name=request.name,
        description=request.description,
    )

    if result.is_err():
        _raise_template_error(result.error)

    return result.value


@router.post(
    "/{template_id}/create-form",
    status_code=status.HTTP_201_CREATED,
    response_model=FormInfo,
)
async def create_form_from_template(
    template_id: str,
    request: CreateFormFromTemplateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    request_context: RequestContext = Depends(get_request_context),
):
    """
    Start a new form from a template

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: TEMPLATE_NOT_FOUND
    """
    template_uuid = parse_uuid(template_id, "INVALID_TEMPLATE_ID", "template ID")
    workspace_uuid = parse_uuid(request.workspace_id, "INVALID_WORKSPACE_ID", "workspace ID")

    use_case = CreateFormFromTemplateUseCase(uow, request_context)
    result = await use_case.execute(
        current_user.user_id,
        template_uuid,
        workspace_uuid,
        title=request.title,
        description=request.description,
    )

    if result.is_err():
        _raise_template_error(result.error)

    return result.value
