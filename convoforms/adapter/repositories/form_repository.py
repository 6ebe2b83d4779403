from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from convoforms.app.repositories.form_repository import IFormRepository
from convoforms.domain.entities import Form, FormTemplate


class FormRepository(IFormRepository):
    """Form repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, form_id: UUID) -> Optional[Form]:
        """Get form by ID"""
        stmt = select(Form).where(Form.id == form_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_workspace(self, workspace_id: UUID) -> List[Form]:
        stmt = (
            select(Form)
            .where(Form.workspace_id == workspace_id)
            .order_by(Form.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, form: Form) -> Form:
        """Create a new form"""
        self.session.add(form)
        await self.session.flush()
        await self.session.refresh(form)
        return form

    async def update(self, form: Form) -> Form:
        """Update existing form"""
        self.session.add(form)
        await self.session.flush()
        await self.session.refresh(form)
        return form

    async def delete(self, form: Form) -> None:
        """Delete a form and its template links"""
        links = await self.session.exec(
            select(FormTemplate).where(FormTemplate.form_id == form.id)
        )
        for link in links.all():
            await self.session.delete(link)
        await self.session.delete(form)
        await self.session.flush()

    async def link_template(self, link: FormTemplate) -> FormTemplate:
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link
