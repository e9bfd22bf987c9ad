"""
infrastructure package

Shared infrastructure components for the GOAP planner.
Provides the planner interface and configuration loading.

Modules:
    - interfaces: Base interface and result container for planners
    - config: PlannerConfig and YAML loading
"""

from infrastructure.interfaces import BasePlanner, PlanningFailure, PlanningResult
from infrastructure.config import PlannerConfig, load_planner_config

__all__ = [
    "BasePlanner",
    "PlanningFailure",
    "PlanningResult",
    "PlannerConfig",
    "load_planner_config",
]
