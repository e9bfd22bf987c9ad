"""
infrastructure/interfaces.py

Base interface for planners.

This module defines the contract every planner implements and the
standard result container, so callers (the executive, tests, tools) can
work with any planner implementation.

Interface Contract:
    - plan(goal, context): forward-ordered Plan or None
    - solve(goal, context): PlanningResult with failure kind and statistics

Usage:
    from infrastructure.interfaces import BasePlanner, PlanningResult

    class MyPlanner(BasePlanner):
        def solve(self, goal, context) -> PlanningResult:
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from component_5_goals import Goal
from component_10_plan import Plan


class PlanningFailure(Enum):
    """Why a planning call produced no plan."""

    UNREACHABLE = "unreachable"  # Frontier emptied before success
    BUDGET_EXHAUSTED = "budget_exhausted"  # Iteration limit reached


@dataclass
class PlanningResult:
    """
    Standardized result container for planners.

    Attributes:
        success: Whether a plan was found
        plan: The plan (None on failure)
        failure: Failure kind (None on success)
        stats: Search statistics (expansions, generated, pruned, ...)
        metadata: Additional planner-specific information
    """

    success: bool
    plan: Optional[Plan] = None
    failure: Optional[PlanningFailure] = None
    stats: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Success and failure kind must agree."""
        if self.success and (self.plan is None or self.failure is not None):
            raise ValueError("A successful result needs a plan and no failure kind")
        if not self.success and (self.plan is not None or self.failure is None):
            raise ValueError("A failed result needs a failure kind and no plan")


class BasePlanner(ABC):
    """
    Abstract base class for planners.

    Thread Safety:
        Planning calls read Variable caches that are shared by the whole
        domain. Calls sharing a domain must not interleave.
    """

    @abstractmethod
    def solve(self, goal: Goal, context: Any) -> PlanningResult:
        """
        Search for a plan achieving goal for context.

        Args:
            goal: Target goal
            context: Opaque execution context passed to variable providers

        Returns:
            PlanningResult with plan or failure kind
        """
        pass

    def plan(self, goal: Goal, context: Any) -> Optional[Plan]:
        """
        Search for a plan; failures of any kind are reported as None.
        """
        return self.solve(goal, context).plan
