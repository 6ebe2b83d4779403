from uuid import uuid4

import pytest

from convoforms.app.services.quota import (
    can_create_workspace,
    can_invite_to_workspace,
    create_default_subscription,
    get_workspace_member_usage,
    get_workspace_usage,
)
from convoforms.domain.entities import Plan, Subscription, SubscriptionStatus


def subscription(plan=Plan.starter, **overrides):
    return Subscription(user_id="user_1", plan=plan, status=SubscriptionStatus.active, **overrides)


@pytest.mark.asyncio
async def test_create_workspace_requires_user(mock_uow):
    decision = await can_create_workspace(mock_uow, None)
    assert not decision.allowed
    assert decision.reason == "User not authenticated"


@pytest.mark.asyncio
@pytest.mark.parametrize("owned,allowed", [(0, True), (1, False), (2, False)])
async def test_starter_workspace_boundary(mock_uow, owned, allowed):
    mock_uow.subscriptions.get_by_user_id.return_value = subscription()
    mock_uow.workspaces.count_by_owner.return_value = owned

    decision = await can_create_workspace(mock_uow, "user_1")

    assert decision.allowed is allowed
    if not allowed:
        assert decision.reason == (
            "You've reached your workspace limit of 1. "
            "Upgrade your plan to create more workspaces."
        )


@pytest.mark.asyncio
async def test_unlimited_plan_allows_any_count(mock_uow):
    mock_uow.subscriptions.get_by_user_id.return_value = subscription(Plan.enterprise)
    mock_uow.workspaces.count_by_owner.return_value = 10_000

    decision = await can_create_workspace(mock_uow, "user_1")

    assert decision.allowed


@pytest.mark.asyncio
async def test_override_raises_workspace_limit(mock_uow):
    mock_uow.subscriptions.get_by_user_id.return_value = subscription(max_workspaces=2)
    mock_uow.workspaces.count_by_owner.return_value = 1

    assert (await can_create_workspace(mock_uow, "user_1")).allowed


@pytest.mark.asyncio
async def test_lock_is_passed_to_subscription_lookup(mock_uow):
    await can_create_workspace(mock_uow, "user_1", lock=True)
    mock_uow.subscriptions.get_by_user_id.assert_awaited_once_with("user_1", for_update=True)


@pytest.mark.asyncio
async def test_starter_cannot_invite(mock_uow):
    mock_uow.subscriptions.get_by_user_id.return_value = subscription()

    decision = await can_invite_to_workspace(mock_uow, uuid4(), "user_1")

    assert not decision.allowed
    assert decision.reason == (
        "Your plan does not support inviting team members. "
        "Upgrade to Pro or Enterprise to add team members."
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("members,allowed,available", [(6, True, 1), (7, False, 0)])
async def test_addon_seats_extend_pro_limit(mock_uow, members, allowed, available):
    """Pro has 5 seats; 2 add-on seats make 7"""
    mock_uow.subscriptions.get_by_user_id.return_value = subscription(Plan.pro, addon_seats=2)
    mock_uow.members.count_by_workspace.return_value = members

    decision = await can_invite_to_workspace(mock_uow, uuid4(), "user_1")

    assert decision.allowed is allowed
    assert decision.available_seats == available
    if not allowed:
        assert decision.reason == (
            "You've reached your seat limit of 7. "
            "Purchase additional seats or upgrade your plan."
        )


@pytest.mark.asyncio
async def test_enterprise_seats_unlimited(mock_uow):
    mock_uow.subscriptions.get_by_user_id.return_value = subscription(Plan.enterprise)
    mock_uow.members.count_by_workspace.return_value = 10_000

    assert (await can_invite_to_workspace(mock_uow, uuid4(), "user_1")).allowed
    mock_uow.members.count_by_workspace.assert_not_awaited()


@pytest.mark.asyncio
async def test_workspace_usage(mock_uow):
    mock_uow.subscriptions.get_by_user_id.return_value = subscription(Plan.pro)
    mock_uow.workspaces.count_by_owner.return_value = 2

    usage = await get_workspace_usage(mock_uow, "user_1")

    assert usage["workspaces"] == {"used": 2, "limit": 3, "unlimited": False}
    assert usage["plan_limits"]["can_invite_users"] is True


@pytest.mark.asyncio
async def test_member_usage_counts_addon_seats(mock_uow):
    mock_uow.subscriptions.get_by_user_id.return_value = subscription(Plan.pro, addon_seats=2)
    mock_uow.members.count_by_workspace.return_value = 3

    usage = await get_workspace_member_usage(mock_uow, uuid4(), "user_1")

    assert usage["members"] == {"used": 3, "limit": 7, "unlimited": False, "addon_seats": 2}


@pytest.mark.asyncio
async def test_default_subscription_is_idempotent(mock_uow):
    existing = subscription(Plan.pro)
    mock_uow.subscriptions.get_by_user_id.return_value = existing

    assert await create_default_subscription(mock_uow, "user_1") is existing
    mock_uow.subscriptions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_default_subscription_is_starter_without_overrides(mock_uow):
    created = await create_default_subscription(mock_uow, "user_1")

    assert created.plan == Plan.starter
    assert created.max_workspaces is None
    assert created.max_seats_per_workspace is None
    assert created.addon_seats == 0
