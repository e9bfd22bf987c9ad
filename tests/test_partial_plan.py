"""
tests/test_partial_plan.py

Tests for partial plans and goal protection (component_8).
"""

import pytest

from component_2_persistent_list import LList, llist
from component_7_domain_registry import DomainRegistry
from component_8_partial_plan import EMPTY_PROTECTED, PartialPlan, protect
from component_12_domain_builders import state_variable


@pytest.fixture
def light_goals():
    registry = DomainRegistry()
    light = state_variable(registry, "light")
    warm = state_variable(registry, "warm")
    return registry.goal(light, True), registry.goal(light, False), registry.goal(warm)


class TestProtect:
    """Tests for the copy-on-write protected map"""

    def test_protect_copies(self, light_goals):
        on, _, warm = light_goals
        first = protect(EMPTY_PROTECTED, on)
        second = protect(first, warm)

        assert dict(first) == {on.variable: on}
        assert dict(second) == {on.variable: on, warm.variable: warm}
        assert len(EMPTY_PROTECTED) == 0

    def test_protecting_same_goal_shares_map(self, light_goals):
        on, _, _ = light_goals
        protected = protect(EMPTY_PROTECTED, on)
        assert protect(protected, on) is protected

    def test_protected_map_is_read_only(self, light_goals):
        on, _, _ = light_goals
        protected = protect(EMPTY_PROTECTED, on)
        with pytest.raises(TypeError):
            protected[on.variable] = None


class TestPartialPlan:
    """Tests for PartialPlan"""

    def test_root(self, light_goals):
        on, _, _ = light_goals
        root = PartialPlan.root(on)
        assert root.actions is None
        assert root.remaining_subgoals.first is on
        assert root.cost == 0.0
        assert root.depth == 0
        assert not root.is_complete

    def test_conflicts_only_with_different_goal(self, light_goals):
        on, off, warm = light_goals
        plan = PartialPlan(
            actions=None,
            remaining_subgoals=llist(off),
            protected=protect(EMPTY_PROTECTED, on),
            cost=1.0,
        )
        assert plan.conflicts_with(off)
        assert not plan.conflicts_with(on)
        assert not plan.conflicts_with(warm)

    def test_forward_actions_and_depth(self):
        registry = DomainRegistry()
        first, second = registry.action("First"), registry.action("Second")
        # Most recently chosen action is executed first
        plan = PartialPlan(
            actions=LList(first, LList(second)),
            remaining_subgoals=None,
            protected=EMPTY_PROTECTED,
            cost=2.0,
        )
        assert plan.forward_actions() == (first, second)
        assert plan.depth == 2
        assert plan.is_complete
        assert "First" in repr(plan)

    def test_partial_plan_is_immutable(self, light_goals):
        root = PartialPlan.root(light_goals[0])
        with pytest.raises(AttributeError):
            root.cost = 5.0
