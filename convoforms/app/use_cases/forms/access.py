from typing import Optional, Tuple
from uuid import UUID

from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import Form
from convoforms.libs.result import Error


async def load_form_for(
    uow: UnitOfWork, user_id: str, form_id: UUID, action: str
) -> Tuple[Optional[Form], Optional[Error]]:
    """Load a form and check forms:<action> in its workspace"""
    form = await uow.forms.get_by_id(form_id)
    if form is None:
        return None, Error("FORM_NOT_FOUND", "Form not found")

    if not await check_workspace_permission(uow, user_id, form.workspace_id, "forms", action):
        return None, Error(
            "INSUFFICIENT_PERMISSIONS", f"You don't have permission to {action} this form"
        )

    return form, None
