from convoforms.domain.entities import Plan, Subscription
from convoforms.domain.plans import PLAN_CONFIGS, UNLIMITED, is_unlimited, resolve_plan_limits


def test_no_subscription_resolves_to_starter():
    assert resolve_plan_limits(None) == PLAN_CONFIGS[Plan.starter]


def test_plan_defaults_apply_without_overrides():
    subscription = Subscription(user_id="user_1", plan=Plan.pro)
    limits = resolve_plan_limits(subscription)
    assert limits.max_workspaces == 3
    assert limits.max_seats_per_workspace == 5
    assert limits.can_invite_users


def test_overrides_win_over_plan_defaults():
    subscription = Subscription(
        user_id="user_1", plan=Plan.starter, max_workspaces=2, max_seats_per_workspace=4
    )
    limits = resolve_plan_limits(subscription)
    assert limits.max_workspaces == 2
    assert limits.max_seats_per_workspace == 4
    # Capabilities still come from the plan
    assert not limits.can_invite_users


def test_enterprise_is_unlimited():
    limits = PLAN_CONFIGS[Plan.enterprise]
    assert limits.max_workspaces == UNLIMITED
    assert is_unlimited(limits.max_seats_per_workspace)
    assert not is_unlimited(0)
