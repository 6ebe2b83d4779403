from typing import Any, Dict, Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.libs.result import Result, Return

from .access import load_form_for
from .dtos import FormInfo, to_form_info

UPDATABLE_FIELDS = ("title", "description", "config", "is_conversational")


class UpdateFormUseCase:
    """
    Update a form's content.

    Every update that changes something bumps the form version.
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self, user_id: str, form_id: UUID, changes: Dict[str, Any]
    ) -> Result[FormInfo]:
        async with self.uow:
            form, error = await load_form_for(self.uow, user_id, form_id, "update")
            if error:
                return Return.err(error)

            changed = [
                field
                for field in UPDATABLE_FIELDS
                if field in changes and getattr(form, field) != changes[field]
            ]
            if not changed:
                return Return.ok(to_form_info(form))

            for field in changed:
                setattr(form, field, changes[field])
            form.version += 1
            form.updated_at = utc_now()
            form = await self.uow.forms.update(form)
            await self.uow.commit()

            await self.activity_logger.form_updated(form.workspace_id, user_id, form.id, changed)

            return Return.ok(to_form_info(form))
