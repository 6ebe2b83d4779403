from typing import Optional, Tuple
from uuid import UUID

from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import Template
from convoforms.libs.result import Error


async def load_readable_template(
    uow: UnitOfWork, user_id: str, template_id: UUID
) -> Tuple[Optional[Template], Optional[Error]]:
    """
    Load a template the user may read or copy from.

    Global templates are readable by everyone; workspace templates need
    templates:read in their workspace.
    """
    template = await uow.templates.get_by_id(template_id)
    if template is None:
        return None, Error("TEMPLATE_NOT_FOUND", "Template not found")

    if template.is_global:
        return template, None

    if template.workspace_id is None or not await check_workspace_permission(
        uow, user_id, template.workspace_id, "templates", "read"
    ):
        return None, Error("INSUFFICIENT_PERMISSIONS", "Access denied to template")

    return template, None
