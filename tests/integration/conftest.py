from typing import List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from convoforms.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from convoforms.api.utils.jwt import create_access_token
from convoforms.app.services.email_sender import (
    EmailResult,
    IEmailSender,
    InvitationEmail,
    WelcomeEmail,
)
from convoforms.depends import get_email_sender, get_unit_of_work


class RecordingEmailSender(IEmailSender):
    """Keeps sent emails in memory so tests can follow invitation links"""

    def __init__(self):
        self.invitations: List[InvitationEmail] = []
        self.welcomes: List[WelcomeEmail] = []

    async def send_invitation_email(self, email: InvitationEmail) -> EmailResult:
        self.invitations.append(email)
        return EmailResult(success=True, id=f"email_{len(self.invitations)}")

    async def send_welcome_email(self, email: WelcomeEmail) -> EmailResult:
        self.welcomes.append(email)
        return EmailResult(success=True)

    def last_invitation_token(self) -> str:
        return self.invitations[-1].invitation_url.split("token=")[1]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def client(db_session, email_sender):
    from convoforms.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Build an Authorization header for an identity-provider user"""

    def _headers(user_id: str, email: str = None, **claims) -> dict:
        if email is None:
            email = f"{user_id}@example.com"
        token = create_access_token(user_id, email=email, **claims)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest.fixture
def onboard(client, auth_headers):
    """Onboard a user and return (headers, default workspace)"""

    async def _onboard(user_id: str, email: str = None, **claims):
        headers = auth_headers(user_id, email, **claims)
        response = await client.post("/workspace/onboard", headers=headers)
        assert response.status_code == 200, response.text
        slug = response.json()["workspace_slug"]
        workspace = (await client.get(f"/workspaces/{slug}", headers=headers)).json()
        return headers, workspace

    return _onboard


@pytest.fixture
def set_plan(client, admin_headers):
    async def _set_plan(user_id: str, **changes):
        response = await client.put(
            f"/admin/subscriptions/{user_id}", json=changes, headers=admin_headers
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _set_plan


@pytest.fixture
def join_workspace(client, auth_headers, email_sender):
    """Invite a user into a workspace and accept as that user; returns their headers"""

    async def _join(owner_headers: dict, workspace_id: str, user_id: str, role: str = "member"):
        email = f"{user_id}@example.com"
        response = await client.post(
            f"/workspaces/by-id/{workspace_id}/invite",
            json={"email": email, "role": role},
            headers=owner_headers,
        )
        assert response.status_code == 201, response.text

        headers = auth_headers(user_id, email)
        response = await client.post(
            "/invitations",
            json={"token": email_sender.last_invitation_token()},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        return headers

    return _join
