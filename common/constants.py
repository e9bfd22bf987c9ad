"""
Centralized constants for the GOAP planner.

This module provides a single source of truth for the default values used
throughout the planner. Components accept overrides via constructor
parameters or via PlannerConfig (infrastructure/config.py).

Organization:
    - Search: iteration budget of the backward search
    - Costs: default action and goal costs
    - Logging: log file names and default levels

Usage:
    from common.constants import DEFAULT_MAX_ITERATIONS
"""

import logging

# =============================================================================
# Search
# =============================================================================

DEFAULT_MAX_ITERATIONS: int = 100
"""
Maximum number of partial plans the planner pops from its frontier before
giving up.

Each iteration either finishes (no open subgoals), prunes a node, or expands
it over all achievers of its next subgoal. Game agents re-plan every tick, so
the budget is kept small; a budget-exhausted search is reported like an
unreachable goal by BackwardPlanner.plan().

Used by:
    - component_9_planner.py: BackwardPlanner default
    - infrastructure/config.py: PlannerConfig default
"""

# =============================================================================
# Costs
# =============================================================================

DEFAULT_ACTION_COST: float = 1.0
"""Cost of an action when none is given."""

DEFAULT_GOAL_COST: float = 1.0
"""
Heuristic weight of an open subgoal.

The search score of a partial plan is its accumulated action cost plus the
summed cost of its open subgoals. This is not a lower bound on the true
remaining cost, so the search is best-effort rather than cost-optimal.
"""

# =============================================================================
# Configuration
# =============================================================================

DEFAULT_CONFIG_FILENAME: str = "goap.yaml"
"""YAML file read by the demo; missing files fall back to the defaults above."""

# =============================================================================
# Logging
# =============================================================================

LOG_DIR_NAME: str = "logs"
ERROR_LOG_FILENAME: str = "goap_errors.log"
PERFORMANCE_LOG_FILENAME: str = "goap_performance.log"
PERFORMANCE_LOGGER_NAME: str = "goap.performance"

CONSOLE_LOG_LEVEL: int = logging.INFO
FILE_LOG_LEVEL: int = logging.DEBUG
