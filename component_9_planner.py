"""
Component 9: Backward Planner

Best-first backward (regression) search over partial plans:

1. Seed the frontier with a root partial plan whose only subgoal is the goal.
2. Pop the cheapest partial plan. If it has no open subgoals, its action
   list (built back to front, so already in execution order) is the plan.
3. Otherwise take its next subgoal. If a different goal is protected for
   the subgoal's variable, pursuing it would clobber a fact a chosen action
   relies on: drop the node.
4. Else, for every achiever of the subgoal, build a child: drop open
   subgoals the achiever produces as side effects, protect preconditions
   that already hold, push the others as new subgoals, and queue the child
   with score = cost so far + summed cost of its open subgoals.
5. Give up when the frontier empties or the iteration budget runs out.

The heuristic is not a guaranteed lower bound, so plans are good but not
provably cost-optimal.

Plans are open-loop: they are correct for the world state observed during
the search, assuming only the plan's own actions change it.
"""

from typing import Any, Dict, Mapping, Optional, Set, Tuple

from common.constants import DEFAULT_MAX_ITERATIONS
from component_2_persistent_list import LList, iter_llist, to_array, where
from component_3_min_queue import MinQueue
from component_4_variables import Variable
from component_5_goals import Goal
from component_8_partial_plan import PartialPlan, protect
from component_10_plan import Plan
from component_15_logging_config import PerformanceLogger, get_logger
from goap_exceptions import InvalidConfigError, PlanNotFoundError
from infrastructure.config import PlannerConfig
from infrastructure.interfaces import BasePlanner, PlanningFailure, PlanningResult

logger = get_logger(__name__)


def total_goal_cost(subgoals: Optional[LList[Goal]]) -> float:
    """Heuristic cost of a list of open subgoals."""
    return sum(goal.cost for goal in iter_llist(subgoals))


def sort_preconditions(
    context: Any,
    preconditions: Tuple[Goal, ...],
    protected: Mapping[Variable, Goal],
    subgoals: Optional[LList[Goal]],
    heuristic: float,
) -> Tuple[Mapping[Variable, Goal], Optional[LList[Goal]], float]:
    """
    Divide preconditions into ones that already hold and ones that do not.

    Holding preconditions are added to the protected goals; the others are
    pushed onto the subgoals (in precondition order, so the last one ends up
    on top) and their cost is added to the heuristic.

    Returns:
        (new protected goals, new subgoals, new heuristic value)
    """
    for precondition in preconditions:
        if precondition.is_true_for(context):
            protected = protect(protected, precondition)
        else:
            subgoals = LList(precondition, subgoals)
            heuristic += precondition.cost
    return protected, subgoals, heuristic


class BackwardPlanner(BasePlanner):
    """
    GOAP planner using best-first backward search.

    Features:
    - Regression from the goal over registered achievers
    - Protection of already-true preconditions against clobbering
    - Persistent partial plans (structure shared between search nodes)
    - Failure kind reporting (unreachable vs. budget exhausted)
    """

    def __init__(self, max_iterations: int = DEFAULT_MAX_ITERATIONS):
        """
        Initialize planner.

        Args:
            max_iterations: Maximum partial plans to pop before giving up

        Raises:
            InvalidConfigError: If max_iterations is not positive
        """
        if max_iterations <= 0:
            raise InvalidConfigError(
                f"max_iterations must be positive, got {max_iterations}",
                context={"max_iterations": max_iterations},
            )
        self.max_iterations = max_iterations
        self.stats: Dict[str, int] = self._empty_stats()

    @classmethod
    def from_config(cls, config: PlannerConfig) -> "BackwardPlanner":
        return cls(max_iterations=config.max_iterations)

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            "iterations": 0,
            "expansions": 0,
            "generated": 0,
            "pruned": 0,
            "max_frontier": 0,
            "plan_length": 0,
        }

    # ========================================================================
    # Search
    # ========================================================================

    def solve(self, goal: Goal, context: Any) -> PlanningResult:
        """
        Find a plan achieving goal for context.

        Variable caches are not invalidated here; callers invalidate the
        domain once per planning episode.

        Args:
            goal: Goal to achieve
            context: Execution context (e.g. the agent) for variable providers

        Returns:
            PlanningResult with the plan, or the failure kind
        """
        logger.debug(f"Planning for goal: {goal}", extra={"max_iterations": self.max_iterations})
        self.stats = self._empty_stats()

        with PerformanceLogger(logger.logger, "backward_plan", goal=str(goal)) as perf:
            plan, failure = self._search(goal, context)

        metadata = {"goal": str(goal), "duration_ms": perf.duration_ms}
        if plan is not None:
            self.stats["plan_length"] = len(plan)
            logger.info(
                f"Plan found for {goal}: {plan}",
                extra={
                    "length": len(plan),
                    "cost": plan.total_cost,
                    "expansions": self.stats["expansions"],
                },
            )
            return PlanningResult(
                success=True, plan=plan, stats=dict(self.stats), metadata=metadata
            )

        logger.info(
            f"No plan found for {goal} ({failure.value})",
            extra={
                "iterations": self.stats["iterations"],
                "expansions": self.stats["expansions"],
                "pruned": self.stats["pruned"],
            },
        )
        return PlanningResult(
            success=False, failure=failure, stats=dict(self.stats), metadata=metadata
        )

    def _search(
        self, goal: Goal, context: Any
    ) -> Tuple[Optional[Plan], Optional[PlanningFailure]]:
        queue: MinQueue[PartialPlan] = MinQueue()
        queue.add(PartialPlan.root(goal), 0.0)

        for _ in range(self.max_iterations):
            if queue.is_empty:
                # Goal is unachievable with the known achievers
                return None, PlanningFailure.UNREACHABLE

            self.stats["iterations"] += 1
            _, partial_plan = queue.remove_min()

            if partial_plan.is_complete:
                return Plan(to_array(partial_plan.actions)), None

            next_subgoal = partial_plan.remaining_subgoals.first
            rest_subgoals = partial_plan.remaining_subgoals.rest

            if partial_plan.conflicts_with(next_subgoal):
                self.stats["pruned"] += 1
                logger.debug(
                    "Pruned partial plan: subgoal conflicts with protected goal",
                    extra={
                        "subgoal": str(next_subgoal),
                        "protected": str(partial_plan.protected[next_subgoal.variable]),
                    },
                )
                continue

            self.stats["expansions"] += 1
            for action in next_subgoal.achievers:
                effects: Set[Goal] = action.effects
                # Subgoals this action achieves as a side effect are free
                new_subgoals = where(rest_subgoals, lambda sub: sub not in effects)
                heuristic = total_goal_cost(new_subgoals)

                new_protected, new_subgoals, heuristic = sort_preconditions(
                    context,
                    action.preconditions,
                    partial_plan.protected,
                    new_subgoals,
                    heuristic,
                )

                child = PartialPlan(
                    actions=LList(action, partial_plan.actions),
                    remaining_subgoals=new_subgoals,
                    protected=new_protected,
                    cost=partial_plan.cost + action.cost,
                )
                queue.add(child, child.cost + heuristic)
                self.stats["generated"] += 1

            self.stats["max_frontier"] = max(self.stats["max_frontier"], len(queue))

        if queue.is_empty:
            return None, PlanningFailure.UNREACHABLE
        return None, PlanningFailure.BUDGET_EXHAUSTED

    def require_plan(self, goal: Goal, context: Any) -> Plan:
        """
        Like plan(), but raises instead of returning None.

        Raises:
            PlanNotFoundError: With the failure kind in its context
        """
        result = self.solve(goal, context)
        if result.plan is None:
            raise PlanNotFoundError(
                f"No plan found for goal '{goal}'",
                failure=result.failure,
                goal=goal,
                context={"iterations": result.stats.get("iterations")},
            )
        return result.plan
