"""
Component 6: Actions

STRIPS-style operator for the backward planner. An action has an ordered
list of precondition goals, a set of effect goals and a cost. Actions take
no arguments.

The behavior attached to an action is opaque to the planner: it is stored
and handed back as part of a plan, and only the executive calls it.
"""

from typing import Any, Optional, Set, Tuple

from common.constants import DEFAULT_ACTION_COST
from component_1_identity import UidBase
from component_15_logging_config import get_logger
from component_5_goals import Goal
from goap_exceptions import DomainConfigurationError

logger = get_logger(__name__)


class Action(UidBase):
    """
    Operator that can appear in a plan.

    Attributes:
        uid: Identity issued by the owning DomainRegistry
        name: Action identifier (for logs and plans)
        behavior: Opaque callable/task handle run by the executive
        cost: Non-negative cost (default 1.0)
        preconditions: Goals that must hold before execution (ordered)
        effects: Goals that hold after successful execution
    """

    def __init__(
        self,
        uid: int,
        name: str,
        behavior: Optional[Any] = None,
        cost: float = DEFAULT_ACTION_COST,
    ):
        self.uid = uid
        self.name = name
        self.behavior = behavior
        self._cost = DEFAULT_ACTION_COST
        self.cost = cost
        self.preconditions: Tuple[Goal, ...] = ()
        self.effects: Set[Goal] = set()

    @property
    def cost(self) -> float:
        return self._cost

    @cost.setter
    def cost(self, value: float) -> None:
        if value < 0:
            raise DomainConfigurationError(
                f"Action cost must be non-negative, got {value}",
                context={"action": self.name},
            )
        self._cost = float(value)

    def achieves(self, *effects: Goal) -> "Action":
        """
        Declare goals this action makes true.

        Adds each goal to the effects and registers the action as one of
        the goal's achievers. A goal already among the effects is skipped,
        so no achiever is listed twice.
        """
        for effect in effects:
            if effect in self.effects:
                logger.debug(
                    "Ignoring repeated effect registration",
                    extra={"action": self.name, "goal": str(effect)},
                )
                continue
            self.effects.add(effect)
            effect.achievers.append(self)
        return self

    def needs(self, *preconditions: Goal) -> "Action":
        """
        Set the preconditions of this action.

        Last write wins: a second call replaces the previous preconditions
        instead of extending them. Order matters; the planner pushes open
        preconditions in this order.
        """
        if self.preconditions:
            logger.debug(
                "Replacing preconditions",
                extra={
                    "action": self.name,
                    "old": [str(p) for p in self.preconditions],
                    "new": [str(p) for p in preconditions],
                },
            )
        self.preconditions = tuple(preconditions)
        return self

    def has_effect(self, goal: Goal) -> bool:
        return goal in self.effects

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Action({self.name!r}, cost={self.cost}, uid={self.uid})"
