from uuid import UUID

from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Error, Result, Return

from .access import load_form_for
from .dtos import FormInfo, ListFormsResponse, to_form_info


class ListFormsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, workspace_id: UUID) -> Result[ListFormsResponse]:
        async with self.uow:
            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "forms", "read"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to view forms in this workspace",
                    )
                )

            forms = await self.uow.forms.list_by_workspace(workspace_id)
            return Return.ok(ListFormsResponse(forms=[to_form_info(f) for f in forms]))


class GetFormUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, form_id: UUID) -> Result[FormInfo]:
        async with self.uow:
            form, error = await load_form_for(self.uow, user_id, form_id, "read")
            if error:
                return Return.err(error)
            return Return.ok(to_form_info(form))
