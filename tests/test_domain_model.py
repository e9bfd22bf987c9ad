"""
tests/test_domain_model.py

Unit tests for the domain model: identities, variables, goals, actions
and the domain registry (components 1 and 4-7).
"""

import pytest

from component_1_identity import IdentitySource
from component_7_domain_registry import DomainRegistry
from goap_exceptions import DomainConfigurationError


class Agent:
    def __init__(self, **state):
        self.state = state


@pytest.fixture
def domain():
    return DomainRegistry("test")


class TestIdentity:
    """Tests for IdentitySource and UID ordering"""

    def test_uids_are_sequential_from_zero(self):
        source = IdentitySource()
        assert source.last_uid == -1
        assert [source.next_uid() for _ in range(3)] == [0, 1, 2]
        assert source.last_uid == 2

    def test_objects_of_one_domain_get_distinct_uids(self, domain):
        v = domain.variable("v", lambda agent: True)
        g = domain.goal(v)
        a = domain.action("A")
        assert len({v.uid, g.uid, a.uid}) == 3
        assert v < g < a

    def test_equality_is_identity(self, domain):
        a1 = domain.action("Same")
        a2 = domain.action("Same")
        assert a1 != a2
        assert a1 == a1
        assert len({a1, a2}) == 2


class TestVariable:
    """Tests for the single-context value cache"""

    def test_value_is_cached_for_same_context(self, domain):
        calls = []

        def provider(agent):
            calls.append(agent)
            return agent.state["x"]

        x = domain.variable("x", provider)
        agent = Agent(x=1)

        assert x.value_for(agent) == 1
        agent.state["x"] = 2
        assert x.value_for(agent) == 1
        assert len(calls) == 1
        assert x.cache_stats() == {"hits": 1, "misses": 1}

    def test_new_context_recomputes(self, domain):
        x = domain.variable("x", lambda agent: agent.state["x"])
        first, second = Agent(x=1), Agent(x=2)

        assert x.value_for(first) == 1
        assert x.value_for(second) == 2
        # Only the most recent context is cached
        assert x.value_for(first) == 1
        assert x.cache_stats()["misses"] == 3

    def test_invalidate_recomputes(self, domain):
        x = domain.variable("x", lambda agent: agent.state["x"])
        agent = Agent(x="old")
        assert x.value_for(agent) == "old"

        agent.state["x"] = "new"
        domain.invalidate_cached_values()
        assert not x.is_cached
        assert x.value_for(agent) == "new"

    def test_none_value_is_cached(self, domain):
        calls = []
        x = domain.variable("x", lambda agent: calls.append(1))
        agent = Agent()
        assert x.value_for(agent) is None
        assert x.value_for(agent) is None
        assert len(calls) == 1

    def test_str_is_name(self, domain):
        assert str(domain.variable("hasAxe", lambda agent: True)) == "hasAxe"


class TestGoal:
    """Tests for goal interning and evaluation"""

    def test_goal_is_interned(self, domain):
        v = domain.variable("v", lambda agent: None)
        assert domain.goal(v, "a") is domain.goal(v, "a")
        assert domain.goal(v, "a") is not domain.goal(v, "b")
        assert domain.goal(v) is domain.goal(v, True)
        assert len(domain.goals) == 3

    def test_find_goal_does_not_create(self, domain):
        v = domain.variable("v", lambda agent: None)
        assert domain.find_goal(v, 5) is None
        goal = domain.goal(v, 5)
        assert domain.find_goal(v, 5) is goal

    def test_find_goal_rejects_foreign_variable(self, domain):
        """Test: Matching UIDs in another registry do not alias its goals"""
        has_wood = domain.variable("hasWood", lambda agent: None)
        domain.goal(has_wood)
        other = DomainRegistry("other")
        door_open = other.variable("doorOpen", lambda agent: None)
        assert door_open.uid == has_wood.uid

        with pytest.raises(DomainConfigurationError):
            domain.find_goal(door_open)
        assert other.find_goal(door_open) is None

    def test_is_true_for(self, domain):
        light = domain.variable("light", lambda agent: agent.state["light"])
        on = domain.goal(light, True)
        off = domain.goal(light, False)
        agent = Agent(light=True)
        assert on.is_true_for(agent)
        assert not off.is_true_for(agent)

    def test_str(self, domain):
        v = domain.variable("door", lambda agent: None)
        assert str(domain.goal(v, "open")) == "door == open"
        assert str(domain.goal(v, None)) == "door == null"

    def test_unhashable_value_raises(self, domain):
        v = domain.variable("v", lambda agent: None)
        with pytest.raises(DomainConfigurationError):
            domain.goal(v, ["not", "hashable"])

    def test_foreign_variable_raises(self, domain):
        other = DomainRegistry("other")
        v = other.variable("v", lambda agent: None)
        with pytest.raises(DomainConfigurationError):
            domain.goal(v)

    def test_valid_when(self, domain):
        v = domain.variable("v", lambda agent: None)
        goal = domain.goal(v)
        assert goal.is_valid_for(Agent())
        assert goal.valid_when(lambda agent: agent.state.get("ok", False)) is goal
        assert not goal.is_valid_for(Agent())
        assert goal.is_valid_for(Agent(ok=True))


class TestAction:
    """Tests for action wiring"""

    def test_achieves_registers_achiever(self, domain):
        v = domain.variable("v", lambda agent: None)
        goal = domain.goal(v)
        action = domain.action("Make").achieves(goal)
        assert goal in action.effects
        assert goal.achievers == [action]
        assert action.has_effect(goal)

    def test_repeated_achieves_is_deduplicated(self, domain):
        v = domain.variable("v", lambda agent: None)
        goal = domain.goal(v)
        action = domain.action("Make").achieves(goal).achieves(goal, goal)
        assert goal.achievers == [action]
        assert len(action.effects) == 1

    def test_achievers_keep_registration_order(self, domain):
        v = domain.variable("v", lambda agent: None)
        goal = domain.goal(v)
        first = domain.action("First").achieves(goal)
        second = domain.action("Second").achieves(goal)
        assert goal.achievers == [first, second]

    def test_needs_last_write_wins(self, domain):
        a = domain.goal(domain.variable("a", lambda agent: None))
        b = domain.goal(domain.variable("b", lambda agent: None))
        action = domain.action("Act").needs(a, b)
        assert action.preconditions == (a, b)
        action.needs(b)
        assert action.preconditions == (b,)

    def test_default_cost(self, domain):
        assert domain.action("A").cost == 1.0
        assert domain.action("Free", cost=0).cost == 0.0

    def test_negative_cost_raises(self, domain):
        with pytest.raises(DomainConfigurationError):
            domain.action("Bad", cost=-1)
        action = domain.action("Ok")
        with pytest.raises(DomainConfigurationError):
            action.cost = -0.5
        assert action.cost == 1.0

    def test_behavior_is_stored(self, domain):
        def behavior(agent):
            return True

        assert domain.action("B", behavior).behavior is behavior


class TestDomainRegistry:
    """Tests for validate() and describe()"""

    def test_validate_reports_wiring_problems(self, domain):
        missing = domain.goal(domain.variable("missing", lambda agent: None))
        target = domain.goal(domain.variable("target", lambda agent: None))
        domain.action("Needy").needs(missing).achieves(target)
        domain.action("AlsoNeedy").needs(missing).achieves(target)
        domain.action("Idle")

        warnings = domain.validate()
        assert "Action 'Idle' has no effects" in warnings
        assert sum("has no achievers" in w for w in warnings) == 1

    def test_validate_clean_domain(self, domain):
        target = domain.goal(domain.variable("target", lambda agent: None))
        domain.action("Make").achieves(target)
        assert domain.validate() == []

    def test_describe(self, domain):
        v = domain.variable("v", lambda agent: None)
        domain.action("Make").achieves(domain.goal(v))
        assert domain.describe() == {
            "name": "test",
            "variables": 1,
            "goals": 1,
            "actions": 1,
            "achiever_links": 1,
        }
