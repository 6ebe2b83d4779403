from uuid import UUID

from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Result, Return

from .access import load_readable_template
from .dtos import TemplateInfo, to_template_info


class GetTemplateUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, template_id: UUID) -> Result[TemplateInfo]:
        """
        Get one template.

        Global templates are visible to every authenticated user, workspace
        templates to members of their workspace.
        """
        async with self.uow:
            template, error = await load_readable_template(self.uow, user_id, template_id)
            if error:
                return Return.err(error)

            return Return.ok(to_template_info(template))
