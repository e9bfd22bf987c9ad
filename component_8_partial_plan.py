"""
Component 8: Partial Plans

Search nodes of the backward planner. A partial plan is an immutable
snapshot of search progress:

- actions: chosen actions, most recently chosen (= executed earliest) first
- remaining_subgoals: open goals, the next one to work on first
- protected: Variable -> Goal map of facts that chosen actions rely on and
  that already hold, so earlier actions must not change them
- cost: accumulated action cost (without the heuristic)

Children share the lists and, where unchanged, the protected map of their
parent. Nothing is mutated after construction.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from component_2_persistent_list import LList, llist_length, to_array
from component_4_variables import Variable
from component_5_goals import Goal
from component_6_actions import Action

EMPTY_PROTECTED: Mapping[Variable, Goal] = MappingProxyType({})


def protect(protected: Mapping[Variable, Goal], goal: Goal) -> Mapping[Variable, Goal]:
    """Return a copy of protected with goal recorded for its variable."""
    if protected.get(goal.variable) is goal:
        return protected
    updated = dict(protected)
    updated[goal.variable] = goal
    return MappingProxyType(updated)


@dataclass(frozen=True, eq=False)
class PartialPlan:
    """
    Node in the backward search tree.

    Attributes:
        actions: Chosen actions in reverse execution order
        remaining_subgoals: Open subgoals in stack order
        protected: Facts that must not be clobbered, keyed by variable
        cost: Summed cost of the chosen actions
    """

    actions: Optional[LList[Action]]
    remaining_subgoals: Optional[LList[Goal]]
    protected: Mapping[Variable, Goal]
    cost: float

    @classmethod
    def root(cls, goal: Goal) -> "PartialPlan":
        """Partial plan with no actions and goal as its only subgoal."""
        return cls(
            actions=None,
            remaining_subgoals=LList(goal),
            protected=EMPTY_PROTECTED,
            cost=0.0,
        )

    @property
    def is_complete(self) -> bool:
        return self.remaining_subgoals is None

    @property
    def depth(self) -> int:
        """Number of actions chosen so far."""
        return llist_length(self.actions)

    def conflicts_with(self, goal: Goal) -> bool:
        """True if a different goal is protected for goal's variable."""
        protected_goal = self.protected.get(goal.variable)
        return protected_goal is not None and protected_goal is not goal

    def forward_actions(self):
        """Chosen actions in execution order."""
        return to_array(self.actions)

    def __repr__(self) -> str:
        return (
            f"PartialPlan(actions={[a.name for a in self.forward_actions()]}, "
            f"subgoals={[str(g) for g in to_array(self.remaining_subgoals)]}, "
            f"cost={self.cost})"
        )
