from typing import Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.libs.result import Result, Return

from .access import load_form_for
from .dtos import FormInfo, to_form_info


class PublishFormUseCase:
    """Publish a form (forms:publish, admin and above). Publishing twice is a no-op."""

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(self, user_id: str, form_id: UUID) -> Result[FormInfo]:
        async with self.uow:
            form, error = await load_form_for(self.uow, user_id, form_id, "publish")
            if error:
                return Return.err(error)

            if form.is_published:
                return Return.ok(to_form_info(form))

            now = utc_now()
            form.is_published = True
            form.published_at = form.published_at or now
            form.updated_at = now
            form = await self.uow.forms.update(form)
            await self.uow.commit()

            await self.activity_logger.form_published(
                form.workspace_id, user_id, form.id, form.title
            )

            return Return.ok(to_form_info(form))
