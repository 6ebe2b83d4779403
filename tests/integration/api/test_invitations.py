from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import func, select

from convoforms.domain.base import utc_now
from convoforms.domain.entities import InvitationStatus, WorkspaceInvitation, WorkspaceMember


@pytest.fixture
def pro_owner(onboard, set_plan):
    async def _pro_owner():
        headers, workspace = await onboard("owner_1", "owner@acme.io", first_name="Olive")
        await set_plan("owner_1", plan="pro")
        return headers, workspace

    return _pro_owner


@pytest.mark.asyncio
async def test_invitation_round_trip(
    client: AsyncClient, db_session, pro_owner, auth_headers, email_sender
):
    """Invite, validate, accept once; a second accept conflicts"""
    owner_headers, workspace = await pro_owner()
    workspace_id = workspace["id"]

    response = await client.post(
        f"/workspaces/by-id/{workspace_id}/invite",
        json={"email": "New@Acme.io", "role": "admin"},
        headers=owner_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email_sent"] is True
    assert data["invitation"]["email"] == "new@acme.io"
    assert data["invitation"]["status"] == "pending"
    assert "token" not in data["invitation"]

    sent = email_sender.invitations[-1]
    assert sent.inviter_name == "Olive"
    assert sent.invitation_url.startswith("http://localhost:3002/invite?token=")
    token = email_sender.last_invitation_token()

    # Public validation, no auth
    response = await client.get("/invitations", params={"token": token})
    assert response.status_code == 200
    assert response.json()["workspace"]["slug"] == workspace["slug"]
    assert response.json()["role"] == "admin"

    invitee = auth_headers("user_2", "new@acme.io", first_name="Nina")
    response = await client.post("/invitations", json={"token": token}, headers=invitee)
    assert response.status_code == 200
    assert response.json() == {
        "workspace_id": workspace_id,
        "workspace_slug": workspace["slug"],
        "workspace_name": workspace["name"],
        "role": "admin",
    }
    assert email_sender.welcomes[-1].workspace_url.endswith(f"/{workspace['slug']}")

    response = await client.post("/invitations", json={"token": token}, headers=invitee)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_MEMBER"

    result = await db_session.exec(
        select(func.count())
        .select_from(WorkspaceMember)
        .where(WorkspaceMember.user_id == "user_2")
    )
    assert result.one() == 1

    invitation = (await db_session.exec(select(WorkspaceInvitation))).one()
    assert invitation.status == InvitationStatus.accepted

    # The joined user now sees the workspace
    response = await client.get("/workspaces", headers=invitee)
    slugs = {ws["slug"]: ws["role"] for ws in response.json()["workspaces"]}
    assert slugs[workspace["slug"]] == "admin"


@pytest.mark.asyncio
async def test_expired_invitation_is_gone(client: AsyncClient, db_session, pro_owner, auth_headers, email_sender):
    owner_headers, workspace = await pro_owner()
    await client.post(
        f"/workspaces/by-id/{workspace['id']}/invite",
        json={"email": "late@acme.io", "role": "member"},
        headers=owner_headers,
    )
    token = email_sender.last_invitation_token()

    invitation = (await db_session.exec(select(WorkspaceInvitation))).one()
    invitation.expires_at = utc_now() - timedelta(milliseconds=1)
    db_session.add(invitation)
    await db_session.commit()

    response = await client.get("/invitations", params={"token": token})
    assert response.status_code == 410
    assert response.json()["error"]["code"] == "INVITATION_EXPIRED"

    await db_session.refresh(invitation)
    assert invitation.status == InvitationStatus.expired

    response = await client.post(
        "/invitations", json={"token": token}, headers=auth_headers("late_user", "late@acme.io")
    )
    assert response.status_code == 410


@pytest.mark.asyncio
async def test_starter_plan_cannot_invite(client: AsyncClient, onboard):
    headers, workspace = await onboard("owner_1", "owner@acme.io")

    response = await client.post(
        f"/workspaces/by-id/{workspace['id']}/invite",
        json={"email": "new@acme.io", "role": "member"},
        headers=headers,
    )

    assert response.status_code == 403
    error = response.json()["error"]
    assert error["code"] == "PLAN_LIMIT_EXCEEDED"
    assert "Upgrade to Pro or Enterprise" in error["message"]


@pytest.mark.asyncio
async def test_invite_validation(client: AsyncClient, pro_owner, auth_headers):
    owner_headers, workspace = await pro_owner()
    url = f"/workspaces/by-id/{workspace['id']}/invite"

    response = await client.post(url, json={"email": "x@acme.io", "role": "owner"}, headers=owner_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ROLE"

    response = await client.post(url, json={"email": "not-an-email", "role": "member"}, headers=owner_headers)
    assert response.status_code == 422

    response = await client.post(url, json={"email": "x@acme.io", "role": "member"}, headers=owner_headers)
    assert response.status_code == 201
    response = await client.post(url, json={"email": "x@acme.io", "role": "viewer"}, headers=owner_headers)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVITE_ALREADY_EXISTS"

    response = await client.post(
        url, json={"email": "y@acme.io", "role": "member"}, headers=auth_headers("stranger")
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_PERMISSIONS"

    response = await client.post("/workspaces/by-id/not-a-uuid/invite", json={"email": "y@acme.io"}, headers=owner_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_revoke_invitation(client: AsyncClient, pro_owner, auth_headers, email_sender):
    owner_headers, workspace = await pro_owner()
    response = await client.post(
        f"/workspaces/by-id/{workspace['id']}/invite",
        json={"email": "new@acme.io", "role": "member"},
        headers=owner_headers,
    )
    invitation_id = response.json()["invitation"]["id"]
    token = email_sender.last_invitation_token()

    response = await client.delete(
        f"/workspaces/by-id/{workspace['id']}/invitations/{invitation_id}",
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "revoked"

    response = await client.get(
        f"/workspaces/by-id/{workspace['id']}/invite", headers=owner_headers
    )
    assert response.json()["invitations"][0]["status"] == "expired"

    response = await client.post(
        "/invitations", json={"token": token}, headers=auth_headers("user_2", "new@acme.io")
    )
    assert response.status_code == 410
    assert response.json()["error"]["code"] == "INVITATION_NO_LONGER_VALID"


@pytest.mark.asyncio
async def test_accept_requires_authentication_and_token(client: AsyncClient, auth_headers):
    response = await client.post("/invitations", json={"token": "a" * 64})
    assert response.status_code == 401

    response = await client.get("/invitations")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_REQUIRED"

    response = await client.get("/invitations", params={"token": "b" * 64})
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INVALID_TOKEN"
