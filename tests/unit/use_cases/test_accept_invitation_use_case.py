from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from convoforms.app.services.email_sender import EmailResult
from convoforms.app.services.identity import CurrentUser
from convoforms.app.use_cases.invitations import (
    AcceptInvitationUseCase,
    ValidateInvitationUseCase,
)
from convoforms.app.use_cases.invitations.tokens import hash_invitation_token
from convoforms.domain.entities import (
    InvitationStatus,
    User,
    Workspace,
    WorkspaceInvitation,
    WorkspaceMember,
    WorkspaceRole,
)

NOW = datetime(2030, 1, 1, 12, 0, 0)
TOKEN = "a" * 64
ONE_MS = timedelta(milliseconds=1)


@pytest.fixture
def workspace():
    return Workspace(id=uuid4(), name="Acme", slug="acme", owner_id="owner_1")


@pytest.fixture
def invitation(mock_uow, workspace):
    invitation = WorkspaceInvitation(
        workspace_id=workspace.id,
        email="new@acme.io",
        role=WorkspaceRole.admin,
        invited_by="owner_1",
        token_hash=hash_invitation_token(TOKEN),
        status=InvitationStatus.pending,
        expires_at=NOW + timedelta(days=7),
        created_at=NOW - timedelta(days=1),
    )
    mock_uow.invitations.get_by_token_hash.return_value = invitation
    mock_uow.workspaces.get_by_id.return_value = workspace
    mock_uow.users.get_by_id.side_effect = lambda user_id: {
        "owner_1": User(id="owner_1", email="owner@acme.io", first_name="Olive")
    }.get(user_id)
    return invitation


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_welcome_email = AsyncMock(return_value=EmailResult(success=True))
    return sender


@pytest.fixture
def invitee():
    return CurrentUser(user_id="user_2", email="new@acme.io", first_name="Nina")


def make_use_case(mock_uow, email_sender, now=NOW):
    return AcceptInvitationUseCase(
        mock_uow, email_sender, "http://localhost:3002", clock=lambda: now
    )


@pytest.mark.asyncio
async def test_accept_creates_membership(mock_uow, invitation, email_sender, invitee, workspace):
    result = await make_use_case(mock_uow, email_sender).execute(TOKEN, invitee)

    assert result.is_ok()
    assert result.value.workspace_slug == "acme"
    assert result.value.role == "admin"
    assert invitation.status == InvitationStatus.accepted

    member: WorkspaceMember = mock_uow.members.create.call_args.args[0]
    assert member.user_id == "user_2"
    assert member.role == WorkspaceRole.admin
    assert member.invited_by == "owner_1"
    assert member.joined_at == NOW

    # User row created from the identity
    created_user = mock_uow.users.create.call_args.args[0]
    assert created_user.email == "new@acme.io"

    welcome = email_sender.send_welcome_email.call_args.args[0]
    assert welcome.workspace_url == "http://localhost:3002/acme"
    assert welcome.user_name == "Nina"


@pytest.mark.asyncio
async def test_identity_without_email_uses_invited_address(mock_uow, invitation, email_sender):
    result = await make_use_case(mock_uow, email_sender).execute(
        TOKEN, CurrentUser(user_id="user_2")
    )

    assert result.is_ok()
    assert mock_uow.users.create.call_args.args[0].email == "new@acme.io"
    assert email_sender.send_welcome_email.call_args.args[0].to == "new@acme.io"


@pytest.mark.asyncio
async def test_expired_one_millisecond_ago(mock_uow, invitation, email_sender, invitee):
    invitation.expires_at = NOW - ONE_MS

    result = await make_use_case(mock_uow, email_sender).execute(TOKEN, invitee)

    assert result.error.code == "INVITATION_EXPIRED"
    assert invitation.status == InvitationStatus.expired
    mock_uow.commit.assert_awaited()
    mock_uow.members.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_expiring_one_millisecond_from_now(mock_uow, invitation, email_sender, invitee):
    invitation.expires_at = NOW + ONE_MS

    result = await make_use_case(mock_uow, email_sender).execute(TOKEN, invitee)

    assert result.is_ok()
    mock_uow.members.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_unknown_token(mock_uow, invitation, email_sender, invitee):
    mock_uow.invitations.get_by_token_hash.return_value = None

    result = await make_use_case(mock_uow, email_sender).execute("b" * 64, invitee)

    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_requires_identity_and_token(mock_uow, email_sender, invitee):
    use_case = make_use_case(mock_uow, email_sender)

    assert (await use_case.execute(TOKEN, None)).error.code == "UNAUTHORIZED"
    assert (await use_case.execute("", invitee)).error.code == "TOKEN_REQUIRED"


@pytest.mark.asyncio
async def test_existing_member_marks_invitation_accepted(
    mock_uow, invitation, email_sender, invitee, workspace
):
    mock_uow.users.get_by_id.side_effect = None
    mock_uow.users.get_by_id.return_value = User(id="user_2", email="new@acme.io")
    mock_uow.members.get.return_value = WorkspaceMember(
        workspace_id=workspace.id, user_id="user_2", role=WorkspaceRole.viewer
    )

    result = await make_use_case(mock_uow, email_sender).execute(TOKEN, invitee)

    assert result.error.code == "ALREADY_MEMBER"
    assert invitation.status == InvitationStatus.accepted
    mock_uow.members.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_second_accept_conflicts(mock_uow, invitation, email_sender, invitee, workspace):
    invitation.status = InvitationStatus.accepted
    mock_uow.members.get.return_value = WorkspaceMember(
        workspace_id=workspace.id, user_id="user_2", role=WorkspaceRole.admin
    )

    result = await make_use_case(mock_uow, email_sender).execute(TOKEN, invitee)

    assert result.error.code == "ALREADY_MEMBER"
    mock_uow.members.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_accepted_invitation_is_no_longer_valid_for_others(
    mock_uow, invitation, email_sender, invitee
):
    invitation.status = InvitationStatus.accepted

    result = await make_use_case(mock_uow, email_sender).execute(TOKEN, invitee)

    assert result.error.code == "INVITATION_NO_LONGER_VALID"


@pytest.mark.asyncio
async def test_concurrent_accept_maps_to_conflict(mock_uow, invitation, email_sender, invitee):
    mock_uow.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))

    result = await make_use_case(mock_uow, email_sender).execute(TOKEN, invitee)

    assert result.error.code == "ALREADY_MEMBER"
    mock_uow.rollback.assert_awaited_once()
    email_sender.send_welcome_email.assert_not_awaited()


@pytest.mark.asyncio
async def test_validate_returns_public_details(mock_uow, invitation):
    result = await ValidateInvitationUseCase(mock_uow, clock=lambda: NOW).execute(TOKEN)

    assert result.is_ok()
    assert result.value.email == "new@acme.io"
    assert result.value.workspace.slug == "acme"
    assert result.value.inviter.name == "Olive"


@pytest.mark.asyncio
async def test_validate_persists_expiry(mock_uow, invitation):
    result = await ValidateInvitationUseCase(
        mock_uow, clock=lambda: invitation.expires_at + ONE_MS
    ).execute(TOKEN)

    assert result.error.code == "INVITATION_EXPIRED"
    assert invitation.status == InvitationStatus.expired
    mock_uow.invitations.update.assert_awaited_once_with(invitation)
