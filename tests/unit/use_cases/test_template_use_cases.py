from uuid import uuid4

import pytest

from convoforms.app.use_cases.templates import (
    GetTemplateUseCase,
    SaveFormAsTemplateUseCase,
    UpdateTemplateUseCase,
)
from convoforms.domain.entities import Form, Template, WorkspaceMember, WorkspaceRole

WORKSPACE_ID = uuid4()
SCHEMA = {"questions": [{"id": "q1", "type": "text"}]}


@pytest.fixture
def as_role(mock_uow):
    def _as_role(role):
        mock_uow.members.get.return_value = (
            WorkspaceMember(workspace_id=WORKSPACE_ID, user_id="user_1", role=role)
            if role
            else None
        )

    return _as_role


@pytest.fixture
def template(mock_uow):
    template = Template(
        name="Feedback", form_schema=dict(SCHEMA), workspace_id=WORKSPACE_ID, created_by="owner_1"
    )
    mock_uow.templates.get_by_id.return_value = template
    return template


@pytest.mark.asyncio
async def test_viewer_can_read_workspace_template(mock_uow, template, as_role):
    as_role(WorkspaceRole.viewer)

    result = await GetTemplateUseCase(mock_uow).execute("user_1", template.id)

    assert result.is_ok()
    assert result.value.name == "Feedback"


@pytest.mark.asyncio
async def test_non_member_cannot_read_workspace_template(mock_uow, template, as_role):
    as_role(None)

    result = await GetTemplateUseCase(mock_uow).execute("user_1", template.id)

    assert result.error.code == "INSUFFICIENT_PERMISSIONS"


@pytest.mark.asyncio
async def test_global_template_is_readable_without_membership(mock_uow, template, as_role):
    template.is_global = True
    template.workspace_id = None
    as_role(None)

    result = await GetTemplateUseCase(mock_uow).execute("user_1", template.id)

    assert result.is_ok()
    mock_uow.members.get.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_requires_admin(mock_uow, template, as_role):
    as_role(WorkspaceRole.member)

    result = await UpdateTemplateUseCase(mock_uow).execute(
        "user_1", template.id, {"name": "NPS"}
    )

    assert result.error.code == "INSUFFICIENT_PERMISSIONS"
    mock_uow.templates.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_applies_changed_fields(mock_uow, template, as_role):
    as_role(WorkspaceRole.admin)

    result = await UpdateTemplateUseCase(mock_uow).execute(
        "user_1", template.id, {"name": "NPS", "form_schema": SCHEMA, "usage_count": 99}
    )

    assert result.is_ok()
    assert result.value.name == "NPS"
    assert result.value.usage_count == 0
    activity = mock_uow.activities.create.call_args.args[0]
    assert activity.action == "template.updated"
    assert activity.activity_metadata == {"changes": ["name"]}


@pytest.mark.asyncio
async def test_update_rejects_cleared_name(mock_uow, template, as_role):
    as_role(WorkspaceRole.owner)

    result = await UpdateTemplateUseCase(mock_uow).execute("user_1", template.id, {"name": None})

    assert result.error.code == "INVALID_TEMPLATE_UPDATE"
    assert template.name == "Feedback"


@pytest.mark.asyncio
async def test_global_template_cannot_be_updated(mock_uow, template, as_role):
    template.is_global = True
    template.workspace_id = None
    as_role(WorkspaceRole.owner)

    result = await UpdateTemplateUseCase(mock_uow).execute("user_1", template.id, {"name": "X"})

    assert result.error.code == "CANNOT_MODIFY_GLOBAL_TEMPLATE"


@pytest.mark.asyncio
async def test_save_form_as_template_copies_config(mock_uow, as_role):
    as_role(WorkspaceRole.admin)
    form = Form(
        workspace_id=WORKSPACE_ID,
        created_by="user_2",
        title="Survey",
        description="Quarterly",
        config={"questions": [{"id": "q1"}]},
    )
    mock_uow.forms.get_by_id.return_value = form

    result = await SaveFormAsTemplateUseCase(mock_uow).execute("user_1", form.id, "Survey template")

    assert result.is_ok()
    assert result.value.form_title == "Survey"
    assert result.value.template.description == "Quarterly"
    created = mock_uow.templates.create.call_args.args[0]
    assert created.workspace_id == WORKSPACE_ID
    assert created.is_global is False
    assert created.created_by == "user_1"

    form.config["questions"].append({"id": "q2"})
    assert created.form_schema == {"questions": [{"id": "q1"}]}


@pytest.mark.asyncio
async def test_save_form_as_template_needs_templates_create(mock_uow, as_role):
    as_role(WorkspaceRole.member)
    form = Form(workspace_id=WORKSPACE_ID, created_by="user_2", title="Survey")
    mock_uow.forms.get_by_id.return_value = form

    result = await SaveFormAsTemplateUseCase(mock_uow).execute("user_1", form.id, "Survey template")

    assert result.error.code == "INSUFFICIENT_PERMISSIONS"
    mock_uow.templates.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_save_missing_form(mock_uow):
    result = await SaveFormAsTemplateUseCase(mock_uow).execute("user_1", uuid4(), "Nope")

    assert result.error.code == "FORM_NOT_FOUND"
