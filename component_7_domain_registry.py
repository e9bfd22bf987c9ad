"""
Component 7: Domain Registry

Owns one planning domain: the identity counter, all Variables, the goal
intern table and all Actions. Domains are configured once, before any
planning call, and are read-only (append-only) afterwards.

Usage:
    domain = DomainRegistry()
    has_axe = domain.variable("hasAxe", lambda agent: agent.has_axe)
    has_wood = domain.variable("hasWood", lambda agent: agent.has_wood)

    domain.action("ChopWood", chop).needs(domain.goal(has_axe)).achieves(
        domain.goal(has_wood)
    )

    domain.invalidate_cached_values()
    plan = BackwardPlanner().plan(domain.goal(has_wood), agent)
"""

from typing import Any, Dict, List, Optional, Tuple

from common.constants import DEFAULT_ACTION_COST
from component_1_identity import IdentitySource
from component_4_variables import ValueProvider, Variable
from component_5_goals import Goal
from component_6_actions import Action
from component_15_logging_config import get_logger
from goap_exceptions import DomainConfigurationError

logger = get_logger(__name__)


class DomainRegistry:
    """
    Registry of Variables, Goals and Actions for one domain.

    Attributes:
        identities: UID source shared by all objects of this domain
        variables: Variables in creation order
        actions: Actions in creation order
    """

    def __init__(self, name: str = "domain"):
        self.name = name
        self.identities = IdentitySource()
        self.variables: List[Variable] = []
        self.actions: List[Action] = []
        self._goals: Dict[Tuple[int, Any], Goal] = {}

    # ========================================================================
    # Construction
    # ========================================================================

    def variable(self, name: str, provider: ValueProvider) -> Variable:
        """Create a Variable whose value is computed by provider(context)."""
        variable = Variable(self.identities.next_uid(), name, provider)
        self.variables.append(variable)
        return variable

    def goal(self, variable: Variable, value: Any = True) -> Goal:
        """
        Return the canonical Goal for (variable, value), creating it on first use.

        The default value True makes the goal for a Boolean variable.

        Raises:
            DomainConfigurationError: If the variable belongs to another
                registry or value is not hashable
        """
        self._check_owned(variable)
        key = self._goal_key(variable, value)
        goal = self._goals.get(key)
        if goal is None:
            goal = Goal(self.identities.next_uid(), variable, value)
            self._goals[key] = goal
        return goal

    def find_goal(self, variable: Variable, value: Any = True) -> Optional[Goal]:
        """
        Return the existing Goal for (variable, value) without creating one.

        Raises:
            DomainConfigurationError: If the variable belongs to another registry
        """
        self._check_owned(variable)
        return self._goals.get(self._goal_key(variable, value))

    def action(
        self,
        name: str,
        behavior: Optional[Any] = None,
        cost: float = DEFAULT_ACTION_COST,
    ) -> Action:
        """Create an Action; wire it with needs()/achieves()."""
        action = Action(self.identities.next_uid(), name, behavior, cost)
        self.actions.append(action)
        return action

    @property
    def goals(self) -> List[Goal]:
        """All interned goals in creation order."""
        return sorted(self._goals.values())

    # ========================================================================
    # Caching
    # ========================================================================

    def invalidate_cached_values(self) -> None:
        """
        Clear the cached values of all variables.

        Call once per planning episode, before planning.
        """
        for variable in self.variables:
            variable.invalidate()
        logger.debug(
            "Variable caches invalidated",
            extra={"domain": self.name, "variables": len(self.variables)},
        )

    # ========================================================================
    # Configuration checks
    # ========================================================================

    def validate(self) -> List[str]:
        """
        Check the domain wiring and return human-readable warnings.

        Reports preconditions nobody achieves and actions without effects.
        These are legal (a precondition may simply have to hold already) but
        are usually configuration mistakes. Never raises.
        """
        warnings: List[str] = []
        reported = set()
        for action in self.actions:
            if not action.effects:
                warnings.append(f"Action '{action.name}' has no effects")
            for precondition in action.preconditions:
                if not precondition.achievers and precondition not in reported:
                    reported.add(precondition)
                    warnings.append(
                        f"Precondition '{precondition}' of '{action.name}' has no achievers"
                    )

        for warning in warnings:
            logger.warning(warning, extra={"domain": self.name})
        return warnings

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "variables": len(self.variables),
            "goals": len(self._goals),
            "actions": len(self.actions),
            "achiever_links": sum(len(g.achievers) for g in self._goals.values()),
        }

    # ========================================================================
    # Helpers
    # ========================================================================

    def _check_owned(self, variable: Variable) -> None:
        if not any(v is variable for v in self.variables):
            raise DomainConfigurationError(
                f"Variable '{variable}' is not registered in domain '{self.name}'",
                context={"variable": str(variable)},
            )

    @staticmethod
    def _goal_key(variable: Variable, value: Any) -> Tuple[int, Any]:
        try:
            hash(value)
        except TypeError as e:
            raise DomainConfigurationError(
                f"Goal value for '{variable}' must be hashable",
                context={"value": repr(value)},
                original_exception=e,
            ) from e
        return (variable.uid, value)
