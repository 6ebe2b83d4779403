import pytest
from unittest.mock import AsyncMock, MagicMock

REPOSITORY_METHODS = {
    "users": ["get_by_id", "get_by_email", "get_by_ids", "create", "update"],
    "workspaces": [
        "get_by_id",
        "get_by_slug",
        "get_default_for_owner",
        "count_by_owner",
        "list_for_member",
        "create",
        "update",
    ],
    "members": ["get", "list_with_users", "count_by_workspace", "create", "update", "delete"],
    "invitations": [
        "get_by_id",
        "get_by_token_hash",
        "get_pending_by_workspace_and_email",
        "list_by_workspace",
        "create",
        "update",
    ],
    "subscriptions": ["get_by_user_id", "create", "update"],
    "activities": ["create", "get_by_workspace_paginated"],
    "forms": ["get_by_id", "list_by_workspace", "create", "update", "delete", "link_template"],
    "templates": ["get_by_id", "list_visible", "create", "update", "delete"],
}


def _echo(entity):
    return entity


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories; create/update return their argument"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for name, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            setattr(repo, method, AsyncMock(return_value=None))
        if "create" in methods:
            repo.create.side_effect = _echo
        if "update" in methods:
            repo.update.side_effect = _echo
        setattr(uow, name, repo)

    uow.workspaces.count_by_owner.return_value = 0
    uow.members.count_by_workspace.return_value = 0
    return uow
