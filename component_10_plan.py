"""
Component 10: Plans

The finished artifact of a planning call: a forward-ordered, immutable
sequence of Actions. Also contains the plan checking tools:

- snapshot_values: read live variables into a {Variable: value} dict
- simulate_plan: state trajectory produced by applying action effects
- validate_plan: check preconditions in order and the final goal
- diagnose_failure: root-cause analysis for an invalid plan

The planner never executes actions, so simulation models execution by
applying each action's effect goals to a value snapshot.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from component_4_variables import Variable
from component_5_goals import Goal
from component_6_actions import Action

State = Dict[Variable, Any]


class Plan:
    """
    Forward-ordered sequence of actions.

    Attributes:
        actions: Actions in execution order
    """

    __slots__ = ("_actions",)

    def __init__(self, actions: Iterable[Action]):
        self._actions: Tuple[Action, ...] = tuple(actions)

    @property
    def actions(self) -> Tuple[Action, ...]:
        return self._actions

    @property
    def total_cost(self) -> float:
        return sum(action.cost for action in self._actions)

    def names(self) -> List[str]:
        return [action.name for action in self._actions]

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def __getitem__(self, index: int) -> Action:
        return self._actions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plan):
            return NotImplemented
        return self._actions == other._actions

    def __hash__(self) -> int:
        return hash(self._actions)

    def __str__(self) -> str:
        return "[" + ", ".join(self.names()) + "]"

    def __repr__(self) -> str:
        return f"Plan({self.names()!r})"


# ============================================================================
# Simulation and Validation
# ============================================================================


def snapshot_values(variables: Iterable[Variable], context: Any) -> State:
    """Read the current value of each variable for context."""
    return {variable: variable.value_for(context) for variable in variables}


def holds(goal: Goal, state: Mapping[Variable, Any]) -> bool:
    """True if goal's variable has the goal value in state."""
    return goal.variable in state and state[goal.variable] == goal.value


def apply_action(action: Action, state: Mapping[Variable, Any]) -> State:
    """Return a new state with the action's effects applied."""
    new_state = dict(state)
    for effect in action.effects:
        new_state[effect.variable] = effect.value
    return new_state


def simulate_plan(plan: Iterable[Action], initial_state: Mapping[Variable, Any]) -> List[State]:
    """
    Apply the plan's effects in order and return the state trajectory.

    Preconditions are not checked; see validate_plan().

    Returns:
        List of states (initial state first, one more per action)
    """
    state = dict(initial_state)
    states = [dict(state)]
    for action in plan:
        state = apply_action(action, state)
        states.append(state)
    return states


def validate_plan(
    plan: Iterable[Action], goal: Goal, initial_state: Mapping[Variable, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate that plan achieves goal from initial_state.

    Returns:
        (success, error_message)
    """
    diagnosis = diagnose_failure(plan, goal, initial_state)
    if diagnosis["error"] is None:
        return True, None
    return False, diagnosis["error"]


def diagnose_failure(
    plan: Iterable[Action], goal: Goal, initial_state: Mapping[Variable, Any]
) -> Dict[str, Any]:
    """
    Analyze why a plan fails (root-cause analysis).

    Returns:
        Diagnostic information:
        - failed_at: Action index where the plan fails (len(plan) if only
          the final goal is missing)
        - failed_action: The failing action (None if the goal is missing)
        - missing_preconditions: Goals not satisfied at that point
        - state_before: State before the failing step
        - error: Description, None if the plan is valid
    """
    state = dict(initial_state)
    actions = list(plan)

    for i, action in enumerate(actions):
        missing = [p for p in action.preconditions if not holds(p, state)]
        if missing:
            return {
                "failed_at": i,
                "failed_action": action,
                "missing_preconditions": missing,
                "state_before": state,
                "error": f"Action {i} ({action}) requires {[str(p) for p in missing]}",
            }
        state = apply_action(action, state)

    if not holds(goal, state):
        return {
            "failed_at": len(actions),
            "failed_action": None,
            "missing_preconditions": [goal],
            "state_before": state,
            "error": f"Goal not achieved. Missing: {goal}",
        }

    return {"error": None}
