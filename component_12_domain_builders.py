"""
Component 12: Domain Builders

Small ready-made planning domains used by the demo and the tests:
- build_wood_domain: chop wood with an axe (optionally fetch the axe first)
- build_chain_domain: linear precondition chain s1 -> s2 -> ... -> sN
- build_cost_choice_domain: two achievers of one goal with different costs
- build_lamp_domain: a cheap option that would clobber a protected fact
- build_side_effect_domain: one action satisfying two open subgoals at once

Each builder returns an ExampleDomain whose variables read a
SimulatedAgent's state dict, and whose actions write their effects into
that dict when performed by the executive.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from common.constants import DEFAULT_CONFIG_FILENAME
from component_6_actions import Action
from component_5_goals import Goal
from component_4_variables import Variable
from component_7_domain_registry import DomainRegistry
from component_15_logging_config import get_logger

logger = get_logger(__name__)


@dataclass(eq=False)
class SimulatedAgent:
    """Execution context whose world state is a plain dict."""

    name: str
    state: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.name


@dataclass
class ExampleDomain:
    """
    A configured domain together with an agent to plan for.

    Attributes:
        registry: Domain registry holding variables, goals and actions
        goal: Goal the example is about
        agent: Execution context
        variables: Variables by name
        actions: Actions by name
    """

    registry: DomainRegistry
    goal: Goal
    agent: SimulatedAgent
    variables: Dict[str, Variable] = field(default_factory=dict)
    actions: Dict[str, Action] = field(default_factory=dict)


def state_variable(domain: DomainRegistry, name: str) -> Variable:
    """Variable reading state[name] from a SimulatedAgent."""
    return domain.variable(name, lambda agent: agent.state.get(name))


def effect_behavior(action: Action) -> Callable[[SimulatedAgent], bool]:
    """Behavior that writes the action's effects into the agent's state."""

    def perform(agent: SimulatedAgent) -> bool:
        for effect in action.effects:
            agent.state[effect.variable.name] = effect.value
        logger.debug(f"{agent} performed {action}")
        return True

    return perform


def _finish(
    registry: DomainRegistry,
    goal: Goal,
    agent: SimulatedAgent,
    variables: Dict[str, Variable],
) -> ExampleDomain:
    for action in registry.actions:
        if action.behavior is None:
            action.behavior = effect_behavior(action)
    return ExampleDomain(
        registry=registry,
        goal=goal,
        agent=agent,
        variables=variables,
        actions={action.name: action for action in registry.actions},
    )


# ============================================================================
# Builders
# ============================================================================


def build_wood_domain(has_axe: bool = True, with_get_axe: bool = False) -> ExampleDomain:
    """
    ChopWood needs hasAxe and achieves hasWood.

    Args:
        has_axe: Initial value of hasAxe
        with_get_axe: Also add GetAxe (achieves hasAxe, cost 2)
    """
    registry = DomainRegistry("wood")
    has_wood = state_variable(registry, "hasWood")
    has_axe_var = state_variable(registry, "hasAxe")

    registry.action("ChopWood").needs(registry.goal(has_axe_var)).achieves(
        registry.goal(has_wood)
    )
    if with_get_axe:
        registry.action("GetAxe", cost=2).achieves(registry.goal(has_axe_var))

    agent = SimulatedAgent("woodcutter", {"hasWood": False, "hasAxe": has_axe})
    return _finish(
        registry,
        registry.goal(has_wood),
        agent,
        {"hasWood": has_wood, "hasAxe": has_axe_var},
    )


def build_chain_domain(length: int = 3) -> ExampleDomain:
    """
    Actions A1..AN where Ai needs s(i-1) and achieves si; the goal is sN.
    """
    if length < 1:
        raise ValueError(f"length must be at least 1, got {length}")

    registry = DomainRegistry("chain")
    variables = {f"s{i}": state_variable(registry, f"s{i}") for i in range(1, length + 1)}

    previous: Optional[Goal] = None
    for i in range(1, length + 1):
        achieved = registry.goal(variables[f"s{i}"])
        action = registry.action(f"A{i}").achieves(achieved)
        if previous is not None:
            action.needs(previous)
        previous = achieved

    agent = SimulatedAgent("chain_agent", {name: False for name in variables})
    return _finish(registry, previous, agent, variables)


def build_cost_choice_domain(
    cheap_cost: float = 1.0, expensive_cost: float = 5.0
) -> ExampleDomain:
    """Cheap and Expensive both achieve goalX without preconditions."""
    registry = DomainRegistry("cost_choice")
    goal_x = state_variable(registry, "goalX")
    target = registry.goal(goal_x)

    registry.action("Expensive", cost=expensive_cost).achieves(target)
    registry.action("Cheap", cost=cheap_cost).achieves(target)

    agent = SimulatedAgent("chooser", {"goalX": False})
    return _finish(registry, target, agent, {"goalX": goal_x})


def build_lamp_domain() -> ExampleDomain:
    """
    Finish needs light and warm. The light is on and must stay on.

    BurnCandle (cost 1) warms but needs the light off; TurnOffLight could
    provide that, but the light is protected for Finish, so the planner
    must fall back to Heater (cost 3).
    """
    registry = DomainRegistry("lamp")
    light = state_variable(registry, "light")
    warm = state_variable(registry, "warm")
    done = state_variable(registry, "done")

    registry.action("Finish").needs(
        registry.goal(light, True), registry.goal(warm, True)
    ).achieves(registry.goal(done))
    registry.action("BurnCandle").needs(registry.goal(light, False)).achieves(
        registry.goal(warm)
    )
    registry.action("TurnOffLight").achieves(registry.goal(light, False))
    registry.action("Heater", cost=3).achieves(registry.goal(warm))

    agent = SimulatedAgent("lamp_agent", {"light": True, "warm": False, "done": False})
    return _finish(
        registry,
        registry.goal(done),
        agent,
        {"light": light, "warm": warm, "done": done},
    )


def build_side_effect_domain() -> ExampleDomain:
    """
    Final needs a and b. OnlyA, OnlyB achieve one each; Both achieves both.
    """
    registry = DomainRegistry("side_effect")
    a = state_variable(registry, "a")
    b = state_variable(registry, "b")
    g = state_variable(registry, "g")

    registry.action("Final").needs(registry.goal(a), registry.goal(b)).achieves(
        registry.goal(g)
    )
    registry.action("OnlyA").achieves(registry.goal(a))
    registry.action("OnlyB").achieves(registry.goal(b))
    registry.action("Both").achieves(registry.goal(a), registry.goal(b))

    agent = SimulatedAgent("side_effect_agent", {"a": False, "b": False, "g": False})
    return _finish(registry, registry.goal(g), agent, {"a": a, "b": b, "g": g})


# ============================================================================
# Demo
# ============================================================================


def main(config_path: str = DEFAULT_CONFIG_FILENAME):
    """Example usage: plan for every example domain and perform the wood plan."""
    from component_9_planner import BackwardPlanner
    from component_11_executive import Executive
    from infrastructure.config import apply_logging_config, load_planner_config

    config = load_planner_config(config_path)
    apply_logging_config(config)
    planner = BackwardPlanner.from_config(config)
    examples = {
        "wood": build_wood_domain(),
        "wood_without_axe": build_wood_domain(has_axe=False, with_get_axe=True),
        "chain": build_chain_domain(4),
        "cost_choice": build_cost_choice_domain(),
        "lamp": build_lamp_domain(),
        "side_effect": build_side_effect_domain(),
    }

    for name, example in examples.items():
        for warning in example.registry.validate():
            logger.info(f"[{name}] {warning}")
        example.registry.invalidate_cached_values()
        result = planner.solve(example.goal, example.agent)
        if result.success:
            print(f"{name}: {result.plan} (cost {result.plan.total_cost})")
        else:
            print(f"{name}: no plan ({result.failure.value})")

    wood = build_wood_domain(has_axe=False, with_get_axe=True)
    executive = Executive(wood.registry, planner, [wood.goal])
    for record in executive.run(wood.agent, max_ticks=3):
        print(f"performed {record.plan} for {record.goal}: success={record.success}")
    print(f"final state: {wood.agent.state}")


if __name__ == "__main__":
    main()
