import pytest

from convoforms.app.use_cases.workspaces import UpdateWorkspaceUseCase
from convoforms.domain.entities import Workspace, WorkspaceMember, WorkspaceRole, WorkspaceType


@pytest.fixture
def workspace(mock_uow):
    workspace = Workspace(name="Acme", slug="acme", type=WorkspaceType.team, owner_id="owner_1")
    mock_uow.workspaces.get_by_slug.return_value = workspace
    return workspace


def member(workspace: Workspace, role: WorkspaceRole) -> WorkspaceMember:
    return WorkspaceMember(workspace_id=workspace.id, user_id="user_1", role=role)


@pytest.mark.asyncio
async def test_non_member_gets_not_found(mock_uow, workspace):
    result = await UpdateWorkspaceUseCase(mock_uow).execute("user_1", "acme", {"name": "X"})

    assert result.is_err()
    assert result.error.code == "WORKSPACE_NOT_FOUND"
    mock_uow.workspaces.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_viewer_cannot_update(mock_uow, workspace):
    mock_uow.members.get.return_value = member(workspace, WorkspaceRole.viewer)

    result = await UpdateWorkspaceUseCase(mock_uow).execute("user_1", "acme", {"name": "X"})

    assert result.error.code == "INSUFFICIENT_PERMISSIONS"


@pytest.mark.asyncio
async def test_name_cannot_be_cleared(mock_uow, workspace):
    mock_uow.members.get.return_value = member(workspace, WorkspaceRole.owner)

    result = await UpdateWorkspaceUseCase(mock_uow).execute(
        "user_1", "acme", {"name": None, "description": "ignored"}
    )

    assert result.error.code == "INVALID_WORKSPACE_UPDATE"
    assert workspace.name == "Acme"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_updates_allowed_fields(mock_uow, workspace):
    mock_uow.members.get.return_value = member(workspace, WorkspaceRole.admin)

    result = await UpdateWorkspaceUseCase(mock_uow).execute(
        "user_1", "acme", {"name": "Acme Forms", "description": None}
    )

    assert result.is_ok()
    assert result.value.name == "Acme Forms"
    assert result.value.role == "admin"
    assert result.value.slug == "acme"
    assert mock_uow.activities.create.call_args.args[0].action == "workspace.updated"
