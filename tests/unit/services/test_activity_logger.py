from uuid import uuid4

import pytest

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext


def test_request_context_prefers_first_forwarded_hop():
    context = RequestContext.from_headers(
        {"x-forwarded-for": "203.0.113.7, 10.0.0.1", "x-real-ip": "10.0.0.2", "user-agent": "ua"}
    )
    assert context.ip_address == "203.0.113.7"
    assert context.user_agent == "ua"


def test_request_context_falls_back_to_real_ip_then_unknown():
    assert RequestContext.from_headers({"x-real-ip": "10.0.0.2"}).ip_address == "10.0.0.2"
    context = RequestContext.from_headers({})
    assert context.ip_address == "unknown"
    assert context.user_agent == "unknown"


@pytest.mark.asyncio
async def test_activity_is_written_and_committed(mock_uow):
    workspace_id = uuid4()
    logger = ActivityLogger(mock_uow, RequestContext("198.51.100.1", "pytest"))

    activity = await logger.member_invited(workspace_id, "user_1", uuid4(), "a@b.co", "member")

    assert activity.action == "member.invited"
    assert activity.workspace_id == workspace_id
    assert activity.activity_metadata == {"email": "a@b.co", "role": "member"}
    assert activity.ip_address == "198.51.100.1"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_activity_failure_is_swallowed(mock_uow, caplog):
    mock_uow.activities.create.side_effect = RuntimeError("database is locked")

    result = await ActivityLogger(mock_uow).workspace_created(uuid4(), "user_1")

    assert result is None
    mock_uow.rollback.assert_awaited_once()
    assert "workspace.created" in caplog.text


@pytest.mark.asyncio
async def test_rollback_failure_is_swallowed_too(mock_uow):
    mock_uow.activities.create.side_effect = RuntimeError("boom")
    mock_uow.rollback.side_effect = RuntimeError("connection closed")

    assert await ActivityLogger(mock_uow).log(uuid4(), "user_1", "form.created") is None
