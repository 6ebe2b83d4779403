from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import and_, col, func, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from convoforms.app.repositories.template_repository import ITemplateRepository
from convoforms.domain.entities import FormTemplate, Template


class TemplateRepository(ITemplateRepository):
    """Template repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, template_id: UUID) -> Optional[Template]:
        """Get template by ID"""
        stmt = select(Template).where(Template.id == template_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_visible(
        self,
        workspace_id: UUID,
        is_global: Optional[bool] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Template], int]:
        workspace_only = and_(
            col(Template.is_global).is_(False), Template.workspace_id == workspace_id
        )
        if is_global is True:
            conditions = [col(Template.is_global).is_(True)]
        elif is_global is False:
            conditions = [workspace_only]
        else:
            conditions = [or_(col(Template.is_global).is_(True), workspace_only)]

        if category:
            conditions.append(Template.category == category)

        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    col(Template.name).ilike(pattern),
                    col(Template.description).ilike(pattern),
                )
            )

        stmt = (
            select(Template)
            .where(*conditions)
            .order_by(col(Template.usage_count).desc(), Template.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        templates = list(result.all())

        count_stmt = select(func.count()).select_from(Template).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        return templates, total

    async def create(self, template: Template) -> Template:
        """Create a new template"""
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def update(self, template: Template) -> Template:
        """Update existing template"""
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def delete(self, template: Template) -> None:
        """Delete a template and its provenance links"""
        links = await self.session.exec(
            select(FormTemplate).where(FormTemplate.template_id == template.id)
        )
        for link in links.all():
            await self.session.delete(link)
        await self.session.delete(template)
        await self.session.flush()
