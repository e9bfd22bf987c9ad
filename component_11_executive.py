"""
Component 11: Executive

Glue around the planner; nothing here is used by the search itself.

- perform_plan: runs a plan's action behaviors one at a time, yielding
  between actions (and between steps of cooperative behaviors)
- run_to_completion: drives such a generator to the end
- Executive: polling loop that picks the first valid top-level goal that
  does not hold yet, plans for it and performs the plan

Behaviors are called with the execution context and may return:
- None or True: the action finished
- False: the action failed
- an iterator: a cooperative task, advanced one step per yield; its
  return value (StopIteration.value) is interpreted as above
"""

from collections.abc import Iterator as IteratorABC
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Sequence

from component_5_goals import Goal
from component_6_actions import Action
from component_7_domain_registry import DomainRegistry
from component_10_plan import Plan
from component_15_logging_config import get_logger
from goap_exceptions import PlanExecutionError
from infrastructure.interfaces import BasePlanner

logger = get_logger(__name__)


def _drive(task: Iterator[Any], action: Action) -> Iterator[Action]:
    """Advance a cooperative task, yielding after each step; return its result."""
    while True:
        try:
            next(task)
        except StopIteration as stop:
            return stop.value
        yield action


def perform_plan(plan: Plan, context: Any) -> Iterator[Action]:
    """
    Execute the plan's actions in order.

    Yields the current action after every step, so a scheduler can
    interleave other work.

    Raises:
        PlanExecutionError: If a behavior raises or reports failure
    """
    for index, action in enumerate(plan):
        behavior = action.behavior
        if behavior is None:
            logger.debug(f"Action {action} has no behavior, treating as done")
            yield action
            continue

        try:
            outcome = behavior(context)
            if isinstance(outcome, IteratorABC):
                outcome = yield from _drive(outcome, action)
        except PlanExecutionError:
            raise
        except Exception as e:
            raise PlanExecutionError(
                f"Action '{action}' raised {type(e).__name__}",
                action_name=action.name,
                action_index=index,
                original_exception=e,
            ) from e

        if outcome is False:
            raise PlanExecutionError(
                f"Action '{action}' reported failure",
                action_name=action.name,
                action_index=index,
            )
        yield action


def run_to_completion(task: Iterator[Any]) -> int:
    """Drive a generator to the end and return the number of steps taken."""
    steps = 0
    for _ in task:
        steps += 1
    return steps


@dataclass
class ExecutionRecord:
    """Outcome of one performed plan."""

    goal: Goal
    plan: Plan
    success: bool
    error: Optional[str] = None


@dataclass
class Executive:
    """
    Polling control loop deciding which top-level goal to pursue.

    Attributes:
        registry: Domain whose variable caches are invalidated every tick
        planner: Planner used for the selected goal
        top_level_goals: Candidate goals in priority order
        on_plan_finished: Called with the context after each performed plan
            (e.g. to stop the agent)
        history: One record per performed plan
    """

    registry: DomainRegistry
    planner: BasePlanner
    top_level_goals: Sequence[Goal]
    on_plan_finished: Optional[Callable[[Any], None]] = None
    history: List[ExecutionRecord] = field(default_factory=list)
    last_goal: Optional[Goal] = None

    def tick(self, context: Any) -> Optional[Plan]:
        """
        One decision step: invalidate caches, then plan for the first goal
        that is valid and not yet true.

        Goals for which no plan is found are skipped in favour of the next.

        Returns:
            The plan found, or None if there is nothing to do
        """
        self.registry.invalidate_cached_values()
        self.last_goal = None
        for goal in self.top_level_goals:
            if not goal.is_valid_for(context) or goal.is_true_for(context):
                continue
            plan = self.planner.plan(goal, context)
            if plan is not None:
                logger.info(f"Got plan {plan} for {goal}", extra={"context": context})
                self.last_goal = goal
                return plan
        return None

    def run(self, context: Any, max_ticks: int) -> List[ExecutionRecord]:
        """
        Run the polling loop for max_ticks ticks, performing each plan found.

        Returns:
            Records of the plans performed during this run
        """
        start = len(self.history)
        for _ in range(max_ticks):
            plan = self.tick(context)
            if plan is None:
                continue

            record = ExecutionRecord(goal=self.last_goal, plan=plan, success=True)
            try:
                run_to_completion(perform_plan(plan, context))
            except PlanExecutionError as e:
                logger.log_exception(e, f"Plan {plan} failed", goal=str(record.goal))
                record.success = False
                record.error = str(e)
            self.history.append(record)

            if self.on_plan_finished is not None:
                self.on_plan_finished(context)
        return self.history[start:]
