"""
Component 5: Goals

A Goal asserts that one Variable holds one specific value. Goals are
interned by the DomainRegistry: there is at most one Goal per
(Variable, value) pair, so goals are compared and hashed by identity.

Each goal keeps the list of Actions registered as achieving it; the
planner expands a subgoal over exactly this list.
"""

from typing import TYPE_CHECKING, Any, Callable, List

from common.constants import DEFAULT_GOAL_COST
from component_1_identity import UidBase
from component_4_variables import Variable

if TYPE_CHECKING:
    from component_6_actions import Action


def _always_valid(context: Any) -> bool:
    return True


class Goal(UidBase):
    """
    Desired value of a Variable.

    Attributes:
        uid: Identity issued by the owning DomainRegistry
        variable: The variable this goal constrains
        value: Target value
        achievers: Actions that have this goal among their effects
        cost: Heuristic weight of the goal while it is an open subgoal
        is_valid_for: Predicate used by the executive to skip top-level
            goals; ignored by the planner
    """

    def __init__(self, uid: int, variable: Variable, value: Any):
        self.uid = uid
        self.variable = variable
        self.value = value
        self.achievers: List["Action"] = []
        self.cost: float = DEFAULT_GOAL_COST
        self.is_valid_for: Callable[[Any], bool] = _always_valid

    def is_true_for(self, context: Any) -> bool:
        """Ask the world whether the goal currently holds for context."""
        return self.variable.value_for(context) == self.value

    def valid_when(self, predicate: Callable[[Any], bool]) -> "Goal":
        """Set the validity predicate consulted by the executive."""
        self.is_valid_for = predicate
        return self

    def __str__(self) -> str:
        value = "null" if self.value is None else self.value
        return f"{self.variable} == {value}"

    def __repr__(self) -> str:
        return f"Goal({self.variable.name!r}, {self.value!r}, uid={self.uid})"
